# src/moodtunes/client/ui.py
# Streamlit front end: free-text mood -> POST /api/generate-playlist -> playlist cards
import html
import sys
from pathlib import Path

import streamlit as st

from moodtunes.client.state import PlaylistSession, UIState
from moodtunes.curator.artwork import fallback_artwork_url

SESSION_KEY = "playlist_session"


def get_session() -> PlaylistSession:
    if SESSION_KEY not in st.session_state:
        st.session_state[SESSION_KEY] = PlaylistSession()
    return st.session_state[SESSION_KEY]


def track_card(name: str, artist: str, artwork: str) -> str:
    fallback = fallback_artwork_url(name)
    src = artwork or fallback
    return (
        '<div class="track">'
        f'<img src="{html.escape(src)}" width="72" height="72" alt="" '
        f"onerror=\"this.onerror=null;this.src='{html.escape(fallback)}';\"/>"
        f"<div><b>{html.escape(name)}</b><br/><span>{html.escape(artist)}</span></div>"
        "</div>"
    )


def render(session: PlaylistSession) -> None:
    if session.state is UIState.LOADING:
        st.info("Analyzing mood...")
    elif session.state is UIState.ERROR:
        st.error(session.error)
    elif session.state is UIState.SUCCESS:
        st.subheader(f"Your mood: {session.mood}")
        if not session.playlist:
            st.write("No tracks found for this mood. Try describing it differently.")
        for track in session.playlist:
            st.markdown(
                track_card(track.name, track.artist, track.artworkUrl),
                unsafe_allow_html=True,
            )
    else:
        st.caption("Describe how you feel and we'll pick the soundtrack.")


def app() -> None:
    st.set_page_config(page_title="MoodTunes", page_icon="🎧", layout="centered")
    st.markdown(
        """
<style>
.track { display:flex; gap:14px; align-items:center; margin:8px 0; }
.track img { border-radius:8px; }
.track span { color:#9aa4b2; }
</style>
""",
        unsafe_allow_html=True,
    )
    st.title("🎧 MoodTunes")

    session = get_session()
    loading = session.state is UIState.LOADING
    text = st.text_area(
        "How do you feel?",
        key="mood_text",
        placeholder="e.g., energetic and ready to go, winding down after work...",
        disabled=loading,
    )
    if not loading:
        session.update_text(text)

    clicked = st.button(
        "Generate Playlist",
        key="generate",
        disabled=not session.can_submit,
        use_container_width=True,
    )
    if clicked and session.begin():
        # The request runs on the next pass, with the widgets already disabled
        st.rerun()

    render(session)

    if loading:
        with st.spinner("Analyzing mood..."):
            session.complete()
        st.rerun()


def main() -> None:
    """Entry point for `moodtunes-ui`."""
    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", str(Path(__file__).resolve())]
    sys.exit(stcli.main())


if __name__ == "__main__":
    app()
