"""
Streamlit Frontend for Fund Tracker

DESIGN PRINCIPLES:
1. One screen: progress, milestones, add / undo / reset
2. Explicit confirmation before the ledger is cleared
3. Short, plain messages for every action
4. Celebrate milestones, but never block the ledger on the animation

The page is only wiring. All decisions live in ContributionSession;
this module provides the notifier, the confirmation prompt and the
host loop that drives confetti frames and staggered messages.
"""

import time

import streamlit as st

from fundtracker.orchestrator import AppComponents, create_app_components
from fundtracker.services.notifications import ConfirmationInterface, NotifierInterface


st.set_page_config(
    page_title="Fund Tracker",
    page_icon="🎯",
    layout="centered",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


class StreamlitNotifier(NotifierInterface):
    """Shows messages as toasts. Streamlit handles dismissal itself."""

    def notify(self, message: str, duration_ms: int) -> None:
        st.toast(message)


class CheckboxConfirmation(ConfirmationInterface):
    """Confirms only when the user ticked the confirmation box this run."""

    def __init__(self):
        self.armed = False

    def confirm(self, message: str) -> bool:
        confirmed = self.armed
        self.armed = False
        return confirmed


def get_components() -> tuple[AppComponents, CheckboxConfirmation]:
    """Build one session per browser session."""
    if "components" not in st.session_state:
        confirmer = CheckboxConfirmation()
        try:
            components = create_app_components(StreamlitNotifier(), confirmer)
        except Exception as e:
            st.error(f"Failed to initialize storage: {e}")
            components = create_app_components(
                StreamlitNotifier(), confirmer, use_storage=False
            )
        st.session_state.components = components
        st.session_state.confirmer = confirmer
    return st.session_state.components, st.session_state.confirmer


def play_celebration(components: AppComponents, placeholder) -> None:
    """
    Run the host loop: confetti frames first, then any staggered
    milestone messages still waiting on the scheduler.
    """
    surface = components.surface
    scheduler = components.scheduler

    def present(now_ms: float) -> None:
        if surface.visible:
            placeholder.image(surface.snapshot(), use_container_width=True)
        else:
            placeholder.empty()
        scheduler.advance(now_ms)

    components.frame_driver.after_frame = present
    components.frame_driver.run()

    while scheduler.pending:
        due = scheduler.next_due_ms()
        wait_ms = max(0.0, due - time.monotonic() * 1000.0)
        time.sleep(wait_ms / 1000.0)
        scheduler.advance()


def on_add():
    """Form callback: add the submitted amount."""
    components, _ = get_components()
    outcome = components.session.add_contribution(st.session_state.get("amount_input", ""))
    if outcome is not None and outcome.reached_milestone:
        st.session_state.celebrate = True


def on_undo():
    components, _ = get_components()
    components.session.undo()


def on_reset():
    components, confirmer = get_components()
    confirmer.armed = st.session_state.get("reset_agreed", False)
    components.session.reset()
    st.session_state.reset_agreed = False


def render_progress(components: AppComponents):
    """Render remaining amount, percent funded and the progress bar."""
    session = components.session
    snapshot = session.snapshot()

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Remaining**")
        st.markdown(
            f'<div class="big-number">{session.format(snapshot.remaining)}</div>',
            unsafe_allow_html=True,
        )
    with col2:
        st.markdown("**Funded**")
        st.markdown(
            f'<div class="big-number">{snapshot.percent_funded}%</div>',
            unsafe_allow_html=True,
        )
    st.progress(snapshot.percent_funded / 100)
    st.caption(
        f"Saved {session.format(snapshot.total)} of {session.format(snapshot.target)}"
        f" in {snapshot.contribution_count} contributions"
    )


def render_actions(components: AppComponents):
    """Render the add form, undo and reset."""
    snapshot = components.session.snapshot()

    with st.form("add_form", clear_on_submit=True):
        st.text_input(
            "Amount to add",
            key="amount_input",
            placeholder="e.g. 250.00",
        )
        st.form_submit_button("➕ Add", type="primary", on_click=on_add)

    col1, col2 = st.columns(2)
    with col1:
        st.button("↩️ Undo last", disabled=not snapshot.can_undo, on_click=on_undo)
    with col2:
        with st.popover("🗑️ Reset"):
            agreed = st.checkbox(
                "Reset all contributions? This cannot be undone.",
                key="reset_agreed",
            )
            st.button("Clear everything", disabled=not agreed, on_click=on_reset)


def render_milestones(components: AppComponents):
    """Render the milestone table."""
    session = components.session
    st.markdown("### Milestones")
    for row in session.milestones():
        marker = "✅" if row.reached else "⬜"
        st.markdown(f"{marker} {row.percent}% · {session.format(row.amount_remaining)}")


def render_activity(components: AppComponents):
    """Render recent audit events."""
    with st.expander("📜 Activity"):
        events = components.audit_storage.get_recent_events(limit=20)
        if not events:
            st.info("Nothing has happened yet.")
        for event in events:
            st.markdown(
                f"`{event.timestamp.strftime('%H:%M:%S')}` {event.description}"
            )


def main():
    """Main application entry point."""
    components, _ = get_components()

    st.title("🎯 Fund Tracker")

    render_progress(components)
    confetti_placeholder = st.empty()

    st.markdown("---")
    render_actions(components)
    render_milestones(components)
    render_activity(components)

    # Celebrate last so the page above is already drawn
    if st.session_state.pop("celebrate", False):
        play_celebration(components, confetti_placeholder)


if __name__ == "__main__":
    main()
