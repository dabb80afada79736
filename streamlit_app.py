import logging
import time
from typing import Dict, List, Optional

import streamlit as st

from shrinkray.catalog import load_puzzle_book
from shrinkray.clock import sync_date, today
from shrinkray.config import get_config, puzzles_path, storage_path
from shrinkray.feedback import letter_statuses
from shrinkray.game import Game
from shrinkray.session import MAX_RETRIES, Attempt
from shrinkray.storage import JsonFileStore
from shrinkray.toasts import ToastQueue

config = get_config()
logging.basicConfig(level=config.get("log_level", "INFO"))

# -----------------------------
# Page config
# -----------------------------
st.set_page_config(page_title="Shrink Ray", page_icon="🔻", layout="centered")

# -----------------------------
# Global styling (loaded ONCE)
# -----------------------------
st.markdown(
    """
    <style>
    .block-container { max-width: 720px; padding-top: 1.0rem; padding-bottom: 2.5rem; }
    [data-testid="stVerticalBlock"] { gap: 0.55rem; }

    header { visibility: hidden; height: 0px; }
    #MainMenu { visibility: hidden; }
    footer { visibility: hidden; }

    .hero { text-align:center; margin-bottom: 6px; }
    .hero-title { font-size: 1.8rem; font-weight: 850; margin: 0; }
    .hero-sub { margin: 0.1rem 0 0 0; color: rgba(0,0,0,0.55); font-size: 0.95rem; }

    .start-block { text-align:center; margin: 6px 0 12px 0; }
    .block-label { color: rgba(0,0,0,0.58); font-size: 0.85rem; text-transform: uppercase; letter-spacing: 0.06em; }
    .start-word { font-size: 2.0rem; font-weight: 900; letter-spacing: 0.25em; }

    /* Stage board */
    .board { display:flex; flex-direction:column; gap:8px; margin: 8px 0 8px 0; }
    .row { display:flex; gap:8px; justify-content:center; align-items:center; }
    .row-label { width: 30px; text-align:right; font-weight: 800; color: rgba(0,0,0,0.45); }
    .row.active .tile { border-color: rgba(0,0,0,0.45); }
    .row.locked .tile { border-color: #B3261E; }

    .tile {
        width: 48px; height: 48px;
        border: 2px solid rgba(0,0,0,0.14);
        border-radius: 10px;
        display:flex; align-items:center; justify-content:center;
        font-size: 24px; font-weight: 900;
        text-transform: uppercase;
        user-select:none;
        box-sizing:border-box;
        background: rgba(255,255,255,0.95);
        color: #111;
    }
    .tile.filled { border-color: rgba(0,0,0,0.28); }

    .letters { display:flex; flex-wrap:wrap; gap:4px; justify-content:center; margin: 4px 0; }
    .letter { padding: 2px 7px; border-radius: 6px; font-weight: 800; color:#fff; }

    .instruction { text-align:center; font-weight: 650; }
    .instruction.error { color: #B3261E; }
    .retry-dots { text-align:center; font-size: 1.2rem; letter-spacing: 0.3em; }

    .stButton button {
        border-radius: 10px !important;
        font-weight: 750 !important;
        padding: 0.4rem 0.2rem !important;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

KEY_ROWS = [
    list("QWERTYUIOP"),
    list("ASDFGHJKL"),
    ["ENTER"] + list("ZXCVBNM") + ["BACKSPACE"],
]
KEY_LABELS = {"ENTER": "Enter", "BACKSPACE": "⌫"}


def skey(name: str) -> str:
    return f"shrink::{name}"


def tile_color(status: str) -> str:
    if status == "correct":
        return "#6AAA64"
    if status == "present":
        return "#C9B458"
    if status == "absent":
        return "#787C7E"
    return "rgba(255,255,255,0.95)"


@st.cache_resource
def load_puzzles(path: str):
    return load_puzzle_book(path)


def init_state():
    if skey("game") not in st.session_state:
        store = JsonFileStore(storage_path())
        st.session_state[skey("game")] = Game(
            load_puzzles(str(puzzles_path())), store, today(), storage_key=config["storage_key"]
        )
    if skey("toasts") not in st.session_state:
        st.session_state[skey("toasts")] = ToastQueue(lifetime=float(config["toast_seconds"]))
    if skey("shown") not in st.session_state:
        st.session_state[skey("shown")] = set()
    if skey("text_rev") not in st.session_state:
        st.session_state[skey("text_rev")] = 0


def notify(text: str):
    if text:
        st.session_state[skey("toasts")].push(text, time.time())


def drain_toasts():
    queue: ToastQueue = st.session_state[skey("toasts")]
    shown = st.session_state[skey("shown")]
    now = time.time()
    for toast in queue.expire(now):
        shown.discard(toast.id)
    for toast in queue.active(now):
        if toast.id not in shown:
            st.toast(toast.text)
            shown.add(toast.id)


def handle_key(game: Game, key: str):
    outcome = game.press(key)
    if outcome is not None:
        notify(outcome.message)
    st.session_state[skey("text_rev")] += 1


def tiles_html(word: str, length: int, feedback: Optional[List[str]] = None) -> str:
    tiles = []
    for i in range(length):
        ch = word[i] if i < len(word) else ""
        if feedback:
            bg = tile_color(feedback[i])
            tiles.append(
                f'<div class="tile filled" style="background:{bg}; border-color:{bg}; color:#fff;">{ch}</div>'
            )
        else:
            filled = "filled" if ch else ""
            tiles.append(f'<div class="tile {filled}">{ch}</div>')
    return "".join(tiles)


def render_board(game: Game):
    rows_html = []
    for stage, (length, solved, attempts) in enumerate(game.stages()):
        is_current = stage == game.current_stage and not game.is_complete
        rows: List[Attempt] = [] if solved else attempts
        for n, attempt in enumerate(rows, start=1):
            rows_html.append(
                f'<div class="row"><span class="row-label">R{n}</span>'
                f"{tiles_html(attempt.guess, length, attempt.feedback)}</div>"
            )

        locked = is_current and game.state.locked_out
        letters = solved or (game.buffer if is_current and not locked else "")
        classes = " ".join(c for c in ("row", "active" if is_current else "", "locked" if locked else "") if c)
        rows_html.append(
            f'<div class="{classes}"><span class="row-label">{length}</span>{tiles_html(letters, length)}</div>'
        )

    st.markdown(f'<div class="board">{"".join(rows_html)}</div>', unsafe_allow_html=True)


def render_letter_strip(statuses: Dict[str, str]):
    if not statuses:
        return
    spans = [
        f'<span class="letter" style="background:{tile_color(statuses[ch])};">{ch}</span>'
        for ch in sorted(statuses)
    ]
    st.markdown(f'<div class="letters">{"".join(spans)}</div>', unsafe_allow_html=True)


def render_keyboard(game: Game):
    for row in KEY_ROWS:
        cols = st.columns(len(row))
        for col, k in zip(cols, row):
            with col:
                if st.button(
                    KEY_LABELS.get(k, k),
                    key=f"{skey('key')}::{k}",
                    use_container_width=True,
                    disabled=game.is_input_locked,
                ):
                    handle_key(game, k)
                    st.rerun()


@st.fragment(run_every=config.get("day_check_seconds", 60))
def day_watch():
    # the full rerun does the actual rollover
    if today() != st.session_state[skey("game")].date:
        st.rerun()


# =============================
# UI
# =============================
init_state()
game: Game = st.session_state[skey("game")]

if sync_date(game):
    st.session_state[skey("text_rev")] += 1

day_watch()

st.markdown(
    f"""
    <div class="hero">
        <div class="hero-title">🔻 Shrink Ray</div>
        <div class="hero-sub">{game.date}</div>
    </div>
    <div class="start-block">
        <div class="block-label">Today's 7-letter word</div>
        <div class="start-word">{game.start_word or "NO PUZZLE"}</div>
    </div>
    """,
    unsafe_allow_html=True,
)

render_board(game)

error = game.puzzle is None or (game.state.locked_out and not game.is_complete)
st.markdown(
    f'<p class="instruction {"error" if error else ""}">{game.instruction}</p>',
    unsafe_allow_html=True,
)

if game.puzzle is not None and not game.is_complete:
    dots = "".join("●" if i < game.state.total_attempts else "○" for i in range(MAX_RETRIES))
    st.markdown(f'<div class="retry-dots">{dots}</div>', unsafe_allow_html=True)

# Visible typing input using key-swap (clears on reset without illegal session_state writes)
rev = st.session_state[skey("text_rev")]
typed = st.text_input(
    "Type a guess",
    value=game.buffer,
    key=f"{skey('typed')}::{rev}",
    max_chars=game.expected_length or None,
    placeholder=f"Type {game.expected_length} letters…" if game.expected_length else "",
    label_visibility="collapsed",
    disabled=game.is_input_locked,
)
if (typed or "").upper() != game.buffer:
    game.type_text(typed)

b1, b2, b3 = st.columns([1, 1, 1])
with b1:
    if st.button("Enter ↵", key=skey("enter"), use_container_width=True, disabled=game.is_input_locked):
        handle_key(game, "ENTER")
        st.rerun()
with b2:
    if st.button("Backspace", key=skey("backspace"), use_container_width=True, disabled=game.is_input_locked):
        handle_key(game, "BACKSPACE")
        st.rerun()
with b3:
    if st.button("Clear", key=skey("clear"), use_container_width=True, disabled=game.is_input_locked):
        game.clear_input()
        st.session_state[skey("text_rev")] += 1
        st.rerun()

render_letter_strip(letter_statuses(game.state.all_attempts()))
render_keyboard(game)

drain_toasts()
