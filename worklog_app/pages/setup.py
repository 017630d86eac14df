"""Connection setup page: collect Jira credentials and initialize WorklogService."""

from __future__ import annotations

import streamlit as st

from worklog_app.app import register_page
from worklog_app.core.dashboard_config import load_dashboard_config
from worklog_app.core.jira_client import JiraAPI, JiraApiError
from worklog_app.core.service import WorklogService


def parse_project_keys(text: str) -> list[str]:
    """Comma/whitespace separated keys, upper-cased, duplicates dropped."""
    keys: list[str] = []
    for part in text.replace(",", " ").split():
        key = part.strip().upper()
        if key and key not in keys:
            keys.append(key)
    return keys


@register_page("Setup / Connection")
def setup_page():
    st.title("Jira Connection Setup")
    st.caption("Enter credentials (use secrets manager in production).")
    dashboard_cfg = load_dashboard_config()

    # Pre-fill from secrets if available (user can override)
    jira_secrets = st.secrets.get("jira", {})
    secret_domain = jira_secrets.get("JIRA_DOMAIN") or st.secrets.get("JIRA_DOMAIN")
    secret_email = jira_secrets.get("JIRA_EMAIL") or st.secrets.get("JIRA_EMAIL")
    secret_token = jira_secrets.get("JIRA_API_TOKEN") or st.secrets.get("JIRA_API_TOKEN")

    domain = st.text_input(
        "Jira Cloud site (e.g. acme or acme.atlassian.net)",
        value=st.session_state.get("jira_domain") or secret_domain or "",
    )
    email = st.text_input(
        "Email",
        value=st.session_state.get("jira_email") or secret_email or "",
    )
    token = st.text_input(
        "API Token",
        type="password",
        value=secret_token or "",
    )
    keys_text = st.text_input(
        "Project keys (comma separated)",
        value=", ".join(st.session_state.get("project_keys") or dashboard_cfg.project_keys),
    )
    ttl = st.number_input(
        "Result cache TTL (seconds)",
        min_value=60,
        max_value=3600,
        value=int(dashboard_cfg.cache_ttl_seconds),
    )
    init_btn = st.button("Test & Save Connection", type="primary")

    if init_btn:
        project_keys = parse_project_keys(keys_text)
        if not (domain and email and token and project_keys):
            st.error("All fields required.")
            return
        try:
            api = JiraAPI(domain, email, token, project_keys)
            me = api.test_connection()
        except JiraApiError as e:
            st.error(f"Connection failed: {e}")
            return
        st.session_state["jira_domain"] = domain
        st.session_state["jira_email"] = email
        st.session_state["jira_server"] = api.server
        st.session_state["project_keys"] = project_keys
        st.session_state["worklog_service"] = WorklogService(api, cache_ttl=float(ttl))
        st.success(f"Connected as {me.get('displayName')}.")

    if "worklog_service" in st.session_state:
        st.info("WorklogService ready.")
