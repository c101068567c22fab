"""Streamlit UI for scanning hematology reports."""

import json
import os
import traceback

import streamlit as st
from dotenv import load_dotenv

from hemascan.pipeline import HematologyPipeline
from hemascan.report import render_pdf_report, DEFAULT_REPORT_NAME

# Load environment variables
load_dotenv()

st.set_page_config(
    page_title="Hematology Report Scanner",
    page_icon="🩸",
    layout="wide"
)

st.title("🩸 Hematology Report Scanner")
st.markdown("""
Extract lab values from a photo of a hematology report:
- **OCR** via Google Cloud Vision or OCR.space
- **Positional extraction**: the Nth number read fills the Nth field
- **PDF report** with one row per field
""")

ocr_provider = os.getenv("HEMASCAN_OCR_PROVIDER", "vision")

st.divider()

col1, col2 = st.columns([1, 1])

with col1:
    st.header("📷 Report Image")

    camera_image = st.camera_input("Take a photo")
    uploaded_file = st.file_uploader(
        "Or choose an image file",
        type=['png', 'jpg', 'jpeg'],
        help="Upload a PNG or JPG photo of a hematology report"
    )

    if camera_image is not None:
        image_file, image_source = camera_image, "camera"
    else:
        image_file, image_source = uploaded_file, "library"

    extract_button = st.button(
        "🚀 Run Extraction",
        type="primary",
        use_container_width=True,
        disabled=image_file is None
    )

    if image_file is not None:
        st.image(image_file, caption="Selected image", use_container_width=True)

with col2:
    st.header("📊 Results")

    if extract_button and image_file is not None:
        try:
            pipeline = HematologyPipeline(ocr_provider=ocr_provider)
            with st.spinner("Reading report..."):
                result = pipeline.extract_from_bytes(
                    image_file.getvalue(),
                    image_format=image_file.type.split('/')[-1].upper(),
                    source=image_source
                )
            st.session_state.extraction_result = result
            st.success("✅ Extraction complete!")
        except Exception as e:
            st.error(f"Extraction error: {e}")
            st.code(traceback.format_exc())

    if 'extraction_result' in st.session_state:
        result = st.session_state.extraction_result

        with st.expander("📈 Metadata", expanded=False):
            meta_col1, meta_col2 = st.columns(2)
            with meta_col1:
                st.metric("Processing Time", f"{result.processing_time:.2f}s")
                st.metric("OCR Provider", result.ocr_result.provider)
            with meta_col2:
                st.metric("Fields Filled", f"{len(result.fields.filled_fields())}/{len(result.fields)}")
                word_level = result.ocr_result.confidence_scores.get('word_level', {})
                if word_level:
                    st.metric("OCR Confidence", f"{word_level.get('mean', 0):.1%}")

        tab1, tab2, tab3 = st.tabs(["📋 Fields", "📄 JSON", "🔍 Raw OCR"])

        with tab1:
            st.subheader("Hematology")
            st.table([{"Field": field, "Result": value} for field, value in result.fields.rows()])
            st.caption("Values are assigned by position. A missing number shifts every later field.")

            st.download_button(
                label="📥 Download PDF",
                data=render_pdf_report(result.fields),
                file_name=DEFAULT_REPORT_NAME,
                mime="application/pdf"
            )

        with tab2:
            st.subheader("JSON Output")
            json_output = result.to_dict()
            st.json(json_output)

            st.download_button(
                label="📥 Download JSON",
                data=json.dumps(json_output, indent=2, ensure_ascii=False, default=str),
                file_name="extraction_result.json",
                mime="application/json"
            )

        with tab3:
            st.subheader("Raw OCR Text")
            st.text_area("OCR Text", value=result.ocr_result.full_text, height=400)

st.divider()
st.markdown("""
<div style='text-align: center; color: gray;'>
    <small>Hematology Report Scanner</small>
</div>
""", unsafe_allow_html=True)
