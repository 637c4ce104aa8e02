"""Upload page - sends statements to the analyzer and builds the store."""
from __future__ import annotations
import streamlit as st

from core.errors import MalformedDate, NetworkFailure, UpstreamError
from core.logger import get_logger
from ui.components import render_file_list, render_upload_form
from ui.services import SessionManager, UploadService

log = get_logger("ui/pages/upload_page")


def render() -> None:
    """Render the upload page."""
    SessionManager.init_session()

    st.header("📥 Upload Statements")
    st.caption("Upload one or more credit card statement PDFs to analyze them together")

    files, years, submitted = render_upload_form()

    if submitted:
        _handle_analyze(files, UploadService.statement_years(years))

    error = SessionManager.get_analysis_error()
    if error:
        st.error(error)

    analysis = SessionManager.get_analysis()
    if analysis is not None:
        render_file_list(UploadService.describe(analysis.files), len(analysis.store))


def _handle_analyze(files, statement_years) -> None:
    """
    Validate, analyze and replace the session's store.

    Any failure leaves the previous analysis untouched.
    """
    is_valid, error_msg = UploadService.validate_files(files)
    if not is_valid:
        if not files:
            st.warning(error_msg)
        else:
            st.error(error_msg)
            log.warning(f"Upload validation failed: {error_msg}")
        return

    statement_files = UploadService.to_statement_files(files)
    if statement_years:
        log.info(f"Statement year overrides: {statement_years}")
    runner = SessionManager.get_runner()
    runner.start(statement_files, statement_years=statement_years)

    with st.status("Analyzing your statements...", expanded=False) as status:
        try:
            result = runner.wait()
        except MalformedDate as e:
            log.error(f"Analysis failed while building the store: {e}")
            _fail(status, f"Analysis failed: {e}")
            return
        except UpstreamError as e:
            _fail(status, e.message)
            return
        except NetworkFailure as e:
            _fail(status, e.message)
            return

        if result is None:
            status.update(label="Analysis cancelled", state="error")
            return

        SessionManager.set_statement_files(statement_files)
        SessionManager.set_analysis(result)
        status.update(label=f"Analyzed {len(result.store):,} transaction(s)", state="complete")
        log.info(f"Analysis complete: files={len(statement_files)} transactions={len(result.store)}")


def _fail(status, message: str) -> None:
    SessionManager.set_analysis_error(message)
    status.update(label=message, state="error")
