"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``worklog_app/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from worklog_app.app import main

st.set_page_config(layout="wide", page_title="Worklog Dashboard")
logger = logging.getLogger(__name__)


def _auto_init_worklog_service():
    """Initialize the worklog service from Streamlit secrets if available."""
    if "worklog_service" in st.session_state:
        return

    from worklog_app.core.dashboard_config import load_dashboard_config

    # Try to get secrets from a [jira] section, fall back to top-level
    jira_secrets = st.secrets.get("jira", {})
    domain = jira_secrets.get("JIRA_DOMAIN") or st.secrets.get("JIRA_DOMAIN")
    email = jira_secrets.get("JIRA_EMAIL") or st.secrets.get("JIRA_EMAIL")
    token = jira_secrets.get("JIRA_API_TOKEN") or st.secrets.get("JIRA_API_TOKEN")
    cfg = load_dashboard_config()
    project_keys = list(jira_secrets.get("PROJECT_KEYS") or cfg.project_keys)

    if domain and email and token and project_keys:
        st.sidebar.info("Secrets found, attempting to connect to Jira...")
        from worklog_app.core.jira_client import JiraAPI, JiraApiError
        from worklog_app.core.service import WorklogService

        try:
            api = JiraAPI(domain, email, token, project_keys)
            api.test_connection()
        except JiraApiError as e:
            st.sidebar.error(f"Jira connection failed: {e}")
            return
        st.session_state["jira_domain"] = domain
        st.session_state["jira_server"] = api.server
        st.session_state["project_keys"] = project_keys
        st.session_state["worklog_service"] = WorklogService(api, cache_ttl=cfg.cache_ttl_seconds)
        st.sidebar.success("Jira connection successful!")
    else:
        st.sidebar.warning("Jira secrets not found. Please use the Setup page.")


_auto_init_worklog_service()

PAGES_DIR = Path(__file__).parent / "worklog_app" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"worklog_app.pages.{py.stem}"
    try:
        import_module(mod_name)
    except Exception as e:  # pragma: no cover
        logger.error("Failed importing page %s: %s", mod_name, e)

if __name__ == "__main__":
    main()
