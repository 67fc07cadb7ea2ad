"""
Streamlit frontend for the Institutions in Your Pocket collaborator page.

Run with:
    streamlit run frontend/ui.py

Renders the whole page from the static site content. The only interactive
piece is the use-case search box: every keystroke reruns the script and the
card list is re-filtered in-process.
"""

import logging
import os
import sys
from datetime import date
from pathlib import Path

import streamlit as st
from dotenv import load_dotenv
from st_keyup import st_keyup

# `streamlit run frontend/ui.py` puts frontend/ on sys.path, not the project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from content.loader import get_site
from content.models import Site, UseCase
from search.filter import UseCaseFilter

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

log = logging.getLogger("ui")
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s  %(levelname)s  %(message)s")
# basicConfig is a no-op once the root logger has handlers
log.setLevel(LOG_LEVEL)


@st.cache_resource
def _load() -> tuple[Site, UseCaseFilter]:
    site = get_site()
    return site, UseCaseFilter(site.use_cases)


def _bullets(items) -> None:
    if items:
        st.markdown("\n".join(f"- {item}" for item in items))


def _chips(items) -> None:
    if items:
        st.markdown(" ".join(f"`{item}`" for item in items))


def _nav_links(site: Site) -> str:
    return " · ".join(f"[{item.label}]({item.href})" for item in site.nav)


def _grid(items, per_row: int = 3):
    """Yield (column, item) pairs, starting a new row every per_row items."""
    for start in range(0, len(items), per_row):
        row = items[start:start + per_row]
        yield from zip(st.columns(per_row), row)


def _use_case_card(uc: UseCase) -> None:
    with st.container(border=True):
        st.markdown(f"{uc.icon}  {' '.join(f'`{t}`' for t in uc.tags)}")
        st.markdown(f"#### {uc.title}")
        st.caption(uc.subtitle)
        _bullets(uc.points)


st.set_page_config(page_title="Collaborator overview", layout="wide")

site, use_case_filter = _load()
project, contact = site.project, site.contact

# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------

head_left, head_right = st.columns([3, 2])
with head_left:
    st.markdown(f"**{project.name}**  \nCollaborator overview")
with head_right:
    st.markdown(f"{_nav_links(site)} · [✉️ Contact](#contact)")

# ---------------------------------------------------------------------------
# Overview
# ---------------------------------------------------------------------------

st.header(project.tagline, anchor="overview")

hero, glance = st.columns([7, 5], gap="large")
with hero:
    st.markdown(project.one_liner)
    _chips(project.areas)
    st.markdown("[Explore collaboration →](#collaboration) · [View use cases →](#use-cases)")

    for col, h in zip(st.columns(len(project.highlights) or 1), project.highlights):
        with col, st.container(border=True):
            st.markdown(f"{h.icon} **{h.title}**")
            st.caption(h.desc)

with glance, st.container(border=True):
    st.subheader("At a glance")
    st.markdown(f"📍 {contact.location} · `Base`")
    st.markdown(f"👥 {contact.affiliation} · `Affiliation`")

    site_col, code_col, paper_col = st.columns(3)
    site_col.link_button("🌐 Site", contact.links.website)
    code_col.link_button("💻 Code", contact.links.github)
    paper_col.link_button("📄 Paper", contact.links.preprint)

    st.caption("Suggested collaborator fit")
    _bullets(project.fit)

for col, section in zip(st.columns(len(site.sections) or 1), site.sections):
    with col, st.container(border=True):
        st.markdown(f"**{section.title}**")
        _bullets(section.bullets)

st.divider()

# ---------------------------------------------------------------------------
# Use cases
# ---------------------------------------------------------------------------

st.header("✨ Use cases", anchor="use-cases")
st.caption("Filter and reuse these modules when pitching to different collaborator types.")

# Reruns on every keystroke, not only on Enter/blur
query = st_keyup(
    "Search use cases",
    key="use_case_query",
    debounce=None,
    placeholder="Search use cases",
    label_visibility="collapsed",
) or ""
matches = use_case_filter.query(query)
if query.strip():
    log.info("use-case query=%r  hits=%d/%d", query, len(matches), len(use_case_filter))

st.caption(f"Showing {len(matches)} of {len(use_case_filter)} use cases")

if matches:
    for col, uc in _grid(matches):
        with col:
            _use_case_card(uc)
else:
    st.info(f"No use cases match “{query.strip()}”.")

with st.container(border=True):
    st.markdown("**Add your artifacts**")
    st.caption("Link to a demo video, pre-analysis plan, or pilot memo.")
    st.markdown(" · ".join(f"[{a.label}]({a.href})" for a in site.artifacts))

st.divider()

# ---------------------------------------------------------------------------
# Collaboration
# ---------------------------------------------------------------------------

st.header("🤝 Collaboration paths", anchor="collaboration")
st.caption("Choose the path that matches your organization.")

paths_tab, process_tab, needs_tab = st.tabs(["Opportunities", "Typical process", "What we need"])

with paths_tab:
    for col, opp in _grid(site.opportunities):
        with col, st.container(border=True):
            st.markdown(f"{opp.icon}  `{opp.who}`")
            st.markdown(f"#### {opp.title}")
            st.caption(opp.desc)
            _bullets(opp.bullets)
            st.markdown("[Start a conversation →](#contact)")

with process_tab:
    collab = site.collaboration
    st.subheader("From idea to evidence")
    st.caption("A default sequence you can edit for your context.")
    for col, step in zip(st.columns(len(collab.steps) or 1), collab.steps):
        with col, st.container(border=True):
            st.markdown(f"**{step.title}**")
            st.caption(step.detail)

    st.markdown("**Evaluation outcomes**")
    for col, outcome in zip(st.columns(len(collab.outcomes) or 1), collab.outcomes):
        with col, st.container(border=True):
            st.markdown(f"**{outcome.title}**")
            st.caption(outcome.detail)

with needs_tab:
    minimum, optional = st.columns(2)
    with minimum, st.container(border=True):
        st.markdown("**Minimum requirements**")
        st.caption("Needed to run a credible pilot + evaluation.")
        _bullets(site.collaboration.minimum_requirements)
    with optional, st.container(border=True):
        st.markdown("**Optional enhancements**")
        st.caption("Adds power and interpretability to results.")
        _bullets(site.collaboration.optional_enhancements)

st.divider()

# ---------------------------------------------------------------------------
# FAQ
# ---------------------------------------------------------------------------

st.header("🛡️ FAQ", anchor="faq")
st.caption("Drop these into grant proposals and partner memos.")

for entry in site.faq:
    with st.expander(entry.question, expanded=False):
        st.markdown(entry.answer)

st.divider()

# ---------------------------------------------------------------------------
# Contact
# ---------------------------------------------------------------------------

st.header("✉️ Contact", anchor="contact")
st.caption("Reach us directly for collaboration or research inquiries.")

emails_col, note_col = st.columns([5, 7])
with emails_col, st.container(border=True):
    st.markdown("**Email contacts**")
    st.caption("Best for agencies, NGOs, and research groups.")
    for email in contact.emails:
        st.markdown(f"[{email}](mailto:{email})")
    web_col, gh_col = st.columns(2)
    web_col.link_button("🌐 Website", contact.links.website)
    gh_col.link_button("💻 GitHub", contact.links.github)

with note_col, st.container(border=True):
    st.markdown("**Coordination note**")
    st.caption(
        "The AI tool is developed by a third-party partner; our team focuses on "
        "research design, evaluation, and governance."
    )
    st.markdown(
        "We support partner scoping, workflow mapping, and evaluation design "
        "while ensuring deployment governance and measurement."
    )
    st.markdown(
        "For sensitive contexts, data sharing and access are governed by "
        "partner agreements and local protocols."
    )

st.divider()

foot_left, foot_right = st.columns([3, 2])
foot_left.caption(f"© {date.today().year} {project.name}. Edit and deploy.")
foot_right.markdown(_nav_links(site))
