"""passgen -- Streamlit web interface."""

import time

import streamlit as st

from passgen import PasswordSession
from passgen.cooldown import ALREADY_USED, COOLING_DOWN
from passgen.generators import WORD_LISTS
from passgen.phonetic import ALPHABETS

# ── Lucide icons (from lucide.dev) ────────────────────────────────────────

_LUCIDE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="{s}" height="{s}" '
    'viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
    'stroke-linecap="round" stroke-linejoin="round">{paths}</svg>'
)

ICON_KEY_ROUND = _LUCIDE.format(s=32, paths=(
    '<path d="M2.586 17.414A2 2 0 0 0 2 18.828V21a1 1 0 0 0 1 1h3'
    'a1 1 0 0 0 1-1v-1a1 1 0 0 1 1-1h1a1 1 0 0 0 1-1v-1'
    'a1 1 0 0 1 1-1h.172a2 2 0 0 0 1.414-.586l.814-.814'
    'a6.5 6.5 0 1 0-4-4z"/>'
    '<circle cx="16.5" cy="7.5" r=".5" fill="currentColor"/>'
))

LABEL_COLORS = {
    "Weak": "#d32f2f",
    "Moderate": "#f57c00",
    "Strong": "#388e3c",
    "Very Strong": "#1b5e20",
}

# ── Page config ───────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Password Generator",
    page_icon="\U0001f511",
    layout="centered",
)

# ── Session state ─────────────────────────────────────────────────────────

if "session" not in st.session_state:
    st.session_state.session = PasswordSession()
    st.session_state.last_tick = time.monotonic()

session: PasswordSession = st.session_state.session

# Catch the cooldowns up with the seconds elapsed since the last rerun.
elapsed = int(time.monotonic() - st.session_state.last_tick)
for _ in range(elapsed):
    session.tick()
st.session_state.last_tick += elapsed


def _gate_caption(state: str, action: str) -> None:
    if state == COOLING_DOWN:
        st.caption(f"⏳ Please wait before you {action} again…")
    elif state == ALREADY_USED:
        st.caption(f"Already done for this password. Generate or edit it to {action} again.")


# ── Header ────────────────────────────────────────────────────────────────

st.markdown(
    f'<h1 style="display:flex;align-items:center;gap:10px">'
    f'{ICON_KEY_ROUND} Password Generator</h1>',
    unsafe_allow_html=True,
)

tab_random, tab_memorable, tab_presets = st.tabs(["Random", "Memorable", "Presets"])

# ── Random tab ────────────────────────────────────────────────────────────

with tab_random:
    listing = session.list_presets()
    names = [p.name for p in listing["presets"]]
    index = names.index(listing["default"]) if listing["default"] in names else 0
    preset_name = st.selectbox("Preset", names, index=index)
    preset = session.store.get(preset_name)

    col1, col2 = st.columns(2)
    with col1:
        length = st.slider("Length", 8, 32, preset.length)
    with col2:
        use_upper = st.checkbox("Uppercase", value=preset.include_uppercase)
        use_digits = st.checkbox("Numbers", value=preset.include_numbers)
        use_symbols = st.checkbox("Special (!@#-?_)", value=preset.include_special)

    if st.button("Generate password", type="primary", key="gen_random"):
        session.generate_random(length, use_upper, use_digits, use_symbols)

# ── Memorable tab ─────────────────────────────────────────────────────────

with tab_memorable:
    col1, col2 = st.columns(2)
    with col1:
        words = st.slider("Words", 1, 5, 3)
        language = st.radio("Language", list(WORD_LISTS), horizontal=True)
    with col2:
        mem_upper = st.checkbox("Capitalise words", value=True)
        mem_digits = st.checkbox("Add a number", value=True)
        mem_symbols = st.checkbox("Add a special character", value=True)

    if st.button("Generate password", type="primary", key="gen_memorable"):
        session.generate_memorable(words, language, mem_upper, mem_digits, mem_symbols)

# ── Presets tab ───────────────────────────────────────────────────────────

def _toggle_preset(name: str) -> None:
    key = f"enabled_{name}"
    result = session.store.set_enabled(name, st.session_state[key])
    if not result["success"]:
        # Drop the widget state so the switch redraws from the stored preset.
        del st.session_state[key]
        st.session_state.preset_warning = result["message"]


with tab_presets:
    if "preset_warning" in st.session_state:
        st.warning(st.session_state.pop("preset_warning"))
    for p in session.store.presets:
        cols = st.columns([4, 1, 2])
        cols[0].markdown(f"**{p.name}** ({p.length})" + (" · built-in" if p.is_built_in else ""))
        cols[1].toggle(
            "On", value=p.enabled, key=f"enabled_{p.name}",
            on_change=_toggle_preset, args=(p.name,),
        )
        if not p.is_built_in and cols[2].button("Delete", key=f"delete_{p.name}"):
            st.toast(session.store.remove(p.name)["message"])
            st.rerun()

    with st.form("add_preset", clear_on_submit=True):
        st.markdown("**New preset**")
        new_name = st.text_input("Name", key="new_name")
        new_length = st.slider("Length", 8, 32, 16, key="new_length")
        new_upper = st.checkbox("Uppercase", value=True, key="new_upper")
        new_numbers = st.checkbox("Numbers", value=True, key="new_numbers")
        new_special = st.checkbox("Special", value=True, key="new_special")
        new_default = st.checkbox("Select by default", key="new_default")
        if st.form_submit_button("Add preset"):
            result = session.store.add(
                new_name, new_length, new_upper, new_numbers, new_special, new_default,
            )
            (st.success if result["success"] else st.error)(result["message"])

# ── Current password ──────────────────────────────────────────────────────

st.divider()
edited = st.text_input("Password", value=session.password, autocomplete="off")
session.set_password(edited)

if session.password:
    report = session.score()
    color = LABEL_COLORS[report["label"]]
    st.markdown(
        f"**Strength:** <span style='color:{color}'>{report['label']}</span>"
        f" &nbsp;·&nbsp; {report['entropy']} bits of entropy",
        unsafe_allow_html=True,
    )
    st.progress(report["percentage"] / 100)

    col_check, col_share = st.columns(2)
    states = session.action_state()

    with col_check:
        if st.button("Check breaches", disabled=states["breach"] != "ready"):
            with st.spinner("Querying Have I Been Pwned…"):
                result = session.check_breach()
            if result["status"] != "ok":
                st.error(f"**Check failed:** {result['error']}")
            elif result["found"]:
                st.error(
                    f"**Breached!** This password appeared **{result['count']:,}** times "
                    "in known data breaches. It cannot be shared."
                )
            else:
                st.success("**Safe!** Not found in any known data breaches.")
        _gate_caption(states["breach"], "check")

    with col_share:
        with st.popover("Share", disabled=states["share"] != "ready"):
            days = st.number_input("Expire after days", 1, 90, 1)
            views = st.number_input("Expire after views", 1, 100, 1)
            deletable = st.checkbox("Viewer may delete", value=True)
            retrieval = st.checkbox("Require click-through", value=False)
            passphrase = st.text_input("Passphrase (optional)", type="password")
            qr = st.checkbox("Share as QR code")
            curl = st.checkbox("Prefer curl")
            if st.button("Create link", type="primary"):
                result = session.share(
                    expire_days=days,
                    expire_views=views,
                    deletable_by_viewer=deletable,
                    retrieval_step=retrieval,
                    passphrase=passphrase or None,
                    use_qr=qr,
                    prefer_curl=curl,
                )
                if result["success"]:
                    st.code(result["url"], language=None)
                else:
                    st.error(result["log"])
        _gate_caption(states["share"], "share")

    with st.expander("Phonetic spelling"):
        alphabet = st.radio("Alphabet", ALPHABETS, horizontal=True)
        st.table(
            [{"Character": c, "Word": w} for c, w in session.transliterate(alphabet)]
        )

# ── Share history ─────────────────────────────────────────────────────────

if len(session.history):
    st.divider()
    st.markdown("**Shared links**")
    for link in session.history:
        cols = st.columns([5, 2, 1])
        status = "expired" if link.is_expired else link.created_at.strftime("%H:%M:%S")
        cols[0].markdown(f"`{link.url}`" + (" (QR)" if link.is_qr else ""))
        cols[1].caption(status)
        if not link.is_expired and cols[2].button("Expire", key=f"expire_{link.token}"):
            result = session.expire_link(link.token)
            (st.toast if result["success"] else st.error)(result["log"])
            st.rerun()
