"""Utilities for preparing HTML snippets before rendering in Streamlit."""
from html import escape
from textwrap import dedent

STATUS_BADGE_COLORS = {
    "approved": ("#dcfce7", "#166534"),
    "rejected": ("#fee2e2", "#991b1b"),
    "pending": ("#fef9c3", "#854d0e"),
}


def html_block(template: str) -> str:
    """
    Normalize multi-line HTML so Streamlit doesn't treat it as Markdown code.

    Streamlit's Markdown renderer interprets lines with >=4 leading spaces as
    code blocks. We dedent and strip leading whitespace on each line to avoid
    that while keeping the markup intact.
    """
    lines = dedent(template).splitlines()
    return "\n".join(line.lstrip() for line in lines).strip()


def stat_card(title: str, value, background: str) -> str:
    """Render a dashboard stat card."""
    return html_block(f"""
        <div style="background: {background}; color: white; padding: 24px; border-radius: 12px;">
            <div style="font-size: 1.05rem; font-weight: 600;">{escape(title)}</div>
            <div style="font-size: 2rem; font-weight: 700;">{escape(str(value))}</div>
        </div>
    """)


def status_badge(status: str) -> str:
    """Render a pill badge for a registration status; unknown values use pending colors."""
    background, color = STATUS_BADGE_COLORS.get(status, STATUS_BADGE_COLORS["pending"])
    return html_block(f"""
        <span style="display: inline-flex; padding: 2px 10px; font-size: 0.75rem;
        font-weight: 600; border-radius: 9999px; background: {background}; color: {color};">
            {escape(status)}
        </span>
    """)
