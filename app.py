"""
Thesis Validator - Streamlit GUI

Upload a thesis, pick the checks to run, review findings and download a copy
annotated with review comments.
Run with: streamlit run app.py
"""
import os
from dataclasses import replace
from pathlib import Path

import streamlit as st

from thesis_validator.adapters.languagetool_adapter import LanguageToolClient, LanguageToolConfig
from thesis_validator.config import default_config
from thesis_validator.errors import ThesisValidatorError
from thesis_validator.pipeline import ThesisValidator, build_response
from thesis_validator.report import render_txt
from thesis_validator.rules import default_rules

st.set_page_config(
    page_title="Thesis Validator",
    page_icon="🎓",
    layout="centered",
)

st.title("🎓 Thesis Formatting Validator")
st.markdown("Check a Word thesis against your university's formatting rules.")

languagetool_url = st.text_input(
    "LanguageTool server",
    value=os.environ.get("LANGUAGETOOL_URL", "http://localhost:8081"),
    help="Base URL of a LanguageTool server used for the grammar check",
)

uploaded_file = st.file_uploader(
    "Drop your thesis here",
    type=["docx"],
    help="Drag and drop a .docx file or click to browse",
)

config = default_config()
validator = ThesisValidator(rules=default_rules(LanguageToolClient(LanguageToolConfig(base_url=languagetool_url))))

st.markdown("---")
st.markdown("### Checks")
selected = st.multiselect(
    "Rules to run (leave empty for all)",
    options=validator.available_rules(),
    default=[],
)
check_grammar = st.checkbox("Grammar and spelling", value=config.check_grammar)
annotate = st.checkbox("Produce a copy with review comments", value=True)

with st.expander(f"Profile: {config.name}", expanded=False):
    font = config.formatting.font
    layout = config.formatting.layout
    st.markdown(f"""
    - Font: **{font.font_family} {font.font_size:g}pt**
    - First-line indent: **{', '.join(f'{cm:g} cm' for cm in layout.allowed_indents_cm)}**
    - Spacing after paragraphs: **{', '.join(f'{pt:g}pt' for pt in layout.paragraph_spacing_pt)}**
    - Maximum heading depth: **{config.formatting.max_heading_depth}**
    - Language: **{config.language}**
    """)

if uploaded_file:
    if st.button("✅ Validate", type="primary", use_container_width=True):
        run_config = replace(config, check_grammar=check_grammar)
        data = uploaded_file.getvalue()
        with st.spinner("Validating..."):
            try:
                if annotate:
                    report = validator.validate_with_comments(data, run_config, selected)
                else:
                    report = validator.validate(data, run_config, selected)
            except ThesisValidatorError as e:
                st.error(f"Error: {e}")
                st.stop()

        payload = build_response(report, run_config, file_name=uploaded_file.name, file_size=len(data))
        st.session_state["payload"] = payload
        st.session_state["doc_stem"] = Path(uploaded_file.name).stem
        st.session_state["annotated"] = getattr(report, "document_bytes", None)

if "payload" in st.session_state:
    payload = st.session_state["payload"]
    doc_stem = st.session_state["doc_stem"]

    if payload["is_valid"]:
        st.success("**No formatting errors found.**")
    else:
        st.error(f"**{payload['total_errors']} errors** need attention.")

    col1, col2, col3 = st.columns(3)
    col1.metric("Errors", payload["total_errors"])
    col2.metric("Warnings", payload["total_warnings"])
    col3.metric("Headings", len(payload["headings"]))

    by_rule = {}
    for r in payload["results"]:
        by_rule.setdefault(r["rule_name"], []).append(r)
    for rule_name, results in by_rule.items():
        with st.expander(f"{rule_name} ({len(results)})"):
            for r in results:
                loc = r["location"]
                where = loc["description"] + (f" · {loc['section']}" if loc.get("section") else "")
                icon = "❌" if r["is_error"] else "⚠️"
                st.markdown(f"{icon} **{where}**: {r['message']}")

    st.markdown("### Downloads")
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "📋 Report",
            render_txt(payload),
            file_name=f"{doc_stem}.report.txt",
            mime="text/plain",
        )
    with col2:
        if st.session_state.get("annotated"):
            st.download_button(
                "📝 Annotated Document",
                st.session_state["annotated"],
                file_name=f"{doc_stem}_annotated.docx",
                mime="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            )

    if st.button("Validate Another Document"):
        for key in ["payload", "doc_stem", "annotated"]:
            if key in st.session_state:
                del st.session_state[key]
        st.rerun()
elif not uploaded_file:
    st.info("Upload a Word document (.docx) to get started.")
