from __future__ import annotations

import base64
import html
from io import BytesIO
from typing import Dict, Sequence

import streamlit as st
from PIL import Image, ImageDraw

from hyrule_compendium.config import get_settings
from hyrule_compendium.coordinator import NO_RESULTS_MESSAGE, Screen, ViewCoordinator
from hyrule_compendium.data import Entry, display_name
from hyrule_compendium.live import CompendiumClient
from hyrule_compendium.navigation import Categories, NavigationStack, SingleItem
from hyrule_compendium.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

GRID_COLUMNS = 3
ICON_SIZE = 64

COLOR_PALETTE: Dict[str, str] = {
    "gold": "#c9a227",
    "dark_gold": "#8a6d12",
    "teal": "#1f6f78",
    "parchment": "#f4ecd8",
    "ink": "#2b2118",
}

CATEGORY_ICONS: Dict[str, str] = {
    "creatures": "🦊",
    "equipment": "🗡️",
    "materials": "🍄",
    "monsters": "👹",
    "treasure": "💎",
}


@st.cache_resource(show_spinner=False)
def get_client() -> CompendiumClient:
    settings = get_settings()
    setup_logging(settings.log_level)
    return CompendiumClient(settings.api_base, settings.request_timeout)


def triforce_icon(px: int = ICON_SIZE) -> Image.Image:
    img = Image.new("RGBA", (px, px), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    color = COLOR_PALETTE["gold"]
    half = px / 2
    pad = px * 0.06
    top, bottom = pad, px - pad
    mid = (top + bottom) / 2
    left, right = pad, px - pad
    quarter_l, quarter_r = (left + half) / 2, (right + half) / 2
    draw.polygon([(half, top), (quarter_r, mid), (quarter_l, mid)], fill=color)
    draw.polygon([(quarter_l, mid), (half, bottom), (left, bottom)], fill=color)
    draw.polygon([(quarter_r, mid), (right, bottom), (half, bottom)], fill=color)
    return img


def image_data_uri(img: Image.Image) -> str:
    buf = BytesIO()
    img.save(buf, format="PNG")
    encoded = base64.b64encode(buf.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def set_page_metadata() -> Dict[str, str]:
    icon = triforce_icon()
    st.set_page_config(
        page_title="Hyrule Compendium",
        page_icon=icon,
        layout="wide",
        initial_sidebar_state="collapsed",
    )
    colors = COLOR_PALETTE
    st.markdown(
        f"""
    <style>
      :root {{
        --hc-gold: {colors["gold"]};
        --hc-dark-gold: {colors["dark_gold"]};
        --hc-teal: {colors["teal"]};
        --hc-parchment: {colors["parchment"]};
        --hc-ink: {colors["ink"]};
      }}
      [data-testid="stAppViewContainer"] {{
        background-color: var(--hc-parchment) !important;
        color: var(--hc-ink) !important;
      }}
      .logo-wrapper {{
        display: flex;
        align-items: center;
        gap: 0.75rem;
        margin-bottom: 0.5rem;
      }}
      .logo-wrapper img {{
        width: 48px;
        height: 48px;
      }}
      .logo-wrapper h1 {{
        margin: 0;
        color: var(--hc-teal);
        font-size: 1.8rem;
      }}
      .section-label {{
        text-transform: uppercase;
        letter-spacing: 0.12em;
        font-size: 0.85rem;
        color: var(--hc-dark-gold);
        margin: 0.6rem 0 0.3rem 0;
      }}
      .list-title {{
        font-size: 1.4rem;
        font-weight: 700;
        color: var(--hc-teal);
        margin-bottom: 0.6rem;
      }}
      .entry-card {{
        background: rgba(255, 255, 255, 0.94);
        border-radius: 18px;
        border: 1px solid rgba(138, 109, 18, 0.25);
        box-shadow: 0 10px 24px rgba(0, 0, 0, 0.08);
        padding: 1.3rem;
        margin-bottom: 1.2rem;
      }}
      .entry-card .card-header {{
        display: flex;
        align-items: center;
        gap: 1.2rem;
      }}
      .entry-card img {{
        height: 140px;
        width: 140px;
        object-fit: contain;
        border-radius: 14px;
        background: var(--hc-parchment);
        padding: 0.4rem;
      }}
      .entry-card .name {{
        font-size: 1.5rem;
        font-weight: 800;
        color: var(--hc-teal);
      }}
      .entry-card .meta {{
        font-size: 0.9rem;
        color: var(--hc-dark-gold);
        text-transform: capitalize;
      }}
      .empty-state {{
        padding: 1rem;
        border-radius: 12px;
        background: rgba(255, 255, 255, 0.8);
        color: rgba(0, 0, 0, 0.6);
      }}
      .footer-bar {{
        margin-top: 2rem;
        font-size: 0.8rem;
        color: rgba(0, 0, 0, 0.55);
        display: flex;
        flex-direction: column;
        gap: 0.2rem;
      }}
    </style>
    """,
        unsafe_allow_html=True,
    )
    return {"icon_uri": image_data_uri(icon)}


def ensure_state() -> None:
    if "coordinator" not in st.session_state:
        settings = get_settings()
        st.session_state["coordinator"] = ViewCoordinator(
            get_client(), NavigationStack(settings.max_history)
        )
    if "search_query_input" not in st.session_state:
        st.session_state["search_query_input"] = ""
    if "enter_submit" not in st.session_state:
        st.session_state["enter_submit"] = False
    if "click_handled" not in st.session_state:
        st.session_state["click_handled"] = False


def coordinator() -> ViewCoordinator:
    return st.session_state["coordinator"]


def _mark_enter_submit() -> None:
    st.session_state["enter_submit"] = True


def _mark_click_handled() -> None:
    # A click in the same run wins over a pending Enter in the search box.
    st.session_state["click_handled"] = True
    st.session_state["enter_submit"] = False


def _on_search() -> None:
    _mark_click_handled()
    coordinator().submit_search(st.session_state.get("search_query_input", ""))


def _on_clear() -> None:
    _mark_click_handled()
    st.session_state["search_query_input"] = ""


def _on_category(category: str) -> None:
    _mark_click_handled()
    coordinator().pick_category(category)


def _on_entry(entry: Entry) -> None:
    _mark_click_handled()
    coordinator().pick_item(entry)


def _on_back() -> None:
    _mark_click_handled()
    coordinator().back()


def _on_home() -> None:
    _mark_click_handled()
    coordinator().home()


def submit_pending_search() -> None:
    pending = st.session_state.get("enter_submit") and not st.session_state.get("click_handled")
    st.session_state["enter_submit"] = False
    st.session_state["click_handled"] = False
    if pending:
        coordinator().submit_search(st.session_state.get("search_query_input", ""))


def render_entry_html(entry: Entry) -> str:
    name = display_name(entry.name)
    image_src = html.escape(entry.image, quote=True)
    image_html = f'<img src="{image_src}" alt="{html.escape(name)}" />' if entry.image else ""
    number = f" · #{entry.id}" if entry.id is not None else ""
    parts = [
        '<div class="entry-card">',
        '  <div class="card-header">',
        f"    {image_html}",
        "    <div>",
        f'      <div class="name">{html.escape(name)}</div>',
        f'      <div class="meta">{html.escape(entry.category)}{number}</div>',
        "    </div>",
        "  </div>",
        f"  <p>{html.escape(entry.description)}</p>",
        "</div>",
    ]
    return "\n".join(parts)


def render_entry_buttons(entries: Sequence[Entry], key_prefix: str) -> None:
    cols = st.columns(GRID_COLUMNS)
    for idx, entry in enumerate(entries):
        with cols[idx % GRID_COLUMNS]:
            st.button(
                display_name(entry.name),
                key=f"{key_prefix}_{idx}_{entry.name}",
                on_click=_on_entry,
                args=(entry,),
                use_container_width=True,
            )


def render_categories(categories: Sequence[str]) -> None:
    st.markdown('<div class="list-title">Categories</div>', unsafe_allow_html=True)
    cols = st.columns(GRID_COLUMNS)
    for idx, category in enumerate(categories):
        icon = CATEGORY_ICONS.get(category.lower(), "📜")
        with cols[idx % GRID_COLUMNS]:
            st.button(
                f"{icon} {display_name(category)}",
                key=f"category_{category}",
                on_click=_on_category,
                args=(category,),
                use_container_width=True,
            )


def render_screen(screen: Screen) -> None:
    state = screen.state
    if isinstance(state, Categories):
        render_categories(screen.categories)
    elif isinstance(state, SingleItem):
        if screen.entry is not None:
            st.markdown(render_entry_html(screen.entry), unsafe_allow_html=True)
        if screen.related:
            st.markdown('<div class="section-label">Related entries</div>', unsafe_allow_html=True)
            render_entry_buttons(screen.related, "related")
    else:
        st.markdown(f'<div class="list-title">{html.escape(screen.title)}</div>', unsafe_allow_html=True)
        if screen.is_empty:
            st.markdown(f'<div class="empty-state">{NO_RESULTS_MESSAGE}</div>', unsafe_allow_html=True)
        else:
            render_entry_buttons(screen.entries, state.tag)


def handle_query_params() -> None:
    entry_param = st.query_params.get("entry")
    if entry_param:
        logger.info("Opening entry %r from query string", entry_param)
        coordinator().open_entry(str(entry_param))
        st.query_params.clear()


def main() -> None:
    assets = set_page_metadata()
    ensure_state()
    submit_pending_search()
    handle_query_params()

    left_col, right_col = st.columns([1, 2], gap="large", vertical_alignment="top")

    with left_col:
        st.markdown(
            f'<div class="logo-wrapper"><img src="{assets["icon_uri"]}" alt="Triforce" />'
            "<h1>Hyrule Compendium</h1></div>",
            unsafe_allow_html=True,
        )
        st.markdown('<div class="section-label">Search</div>', unsafe_allow_html=True)
        search_value = st.text_input(
            "Search the compendium",
            placeholder="Search by name, e.g. moblin",
            key="search_query_input",
            label_visibility="collapsed",
            autocomplete="off",
            on_change=_mark_enter_submit,
        )
        search_cols = st.columns(2)
        with search_cols[0]:
            st.button("Search", use_container_width=True, key="search_submit", on_click=_on_search)
        with search_cols[1]:
            st.button(
                "Clear",
                use_container_width=True,
                key="clear_search",
                on_click=_on_clear,
                disabled=not bool(search_value),
            )

        screen = coordinator().screen or coordinator().refresh()
        feedback = coordinator().take_feedback()

        nav_cols = st.columns(2)
        with nav_cols[0]:
            st.button(
                "← Back",
                use_container_width=True,
                key="nav_back",
                on_click=_on_back,
                disabled=not screen.can_go_back,
            )
        with nav_cols[1]:
            st.button(
                "Categories",
                use_container_width=True,
                key="nav_home",
                on_click=_on_home,
                disabled=isinstance(screen.state, Categories) and not screen.error,
            )
        if feedback:
            st.warning(feedback)
        if screen.error:
            st.error(screen.error)

    with right_col:
        render_screen(screen)

    st.markdown(
        """
        <div class="footer-bar">
          <span>Data from the Hyrule Compendium API.</span>
          <span>The Legend of Zelda and all related names are trademarks of Nintendo. Non-commercial fan project.</span>
        </div>
        """,
        unsafe_allow_html=True,
    )


if __name__ == "__main__":
    main()
