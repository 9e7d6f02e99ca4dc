"""Calculator keypad."""

import streamlit as st

from groomdesk.app.views.colors import Colors
from groomdesk.core.calculator import CalculatorState

# (label, key) per row; key None marks the clear action
KEYPAD: list[list[tuple[str, str | None]]] = [
    [("C", None), ("(", "("), (")", ")"), ("÷", "/")],
    [("7", "7"), ("8", "8"), ("9", "9"), ("×", "*")],
    [("4", "4"), ("5", "5"), ("6", "6"), ("-", "-")],
    [("1", "1"), ("2", "2"), ("3", "3"), ("+", "+")],
    [("0", "0"), (".", "."), ("⌫", "back"), ("=", "=")],
]


def _handle(state: CalculatorState, key: str | None) -> None:
    if key is None:
        state.clear()
    elif key == "back":
        state.backspace()
    elif key == "=":
        state.calculate()
    else:
        state.press(key)


def render_calculator_view(state: CalculatorState) -> None:
    st.header("🧮 Calculadora")

    with st.container(border=True):
        st.markdown(
            f"<div style='text-align: right; color: {Colors.gray}'>{state.display_input}</div>"
            f"<div style='text-align: right; font-size: 2.2em; font-weight: 600'>"
            f"{state.display_result or '&nbsp;'}</div>",
            unsafe_allow_html=True,
        )

    for row_index, row in enumerate(KEYPAD):
        cols = st.columns(4)
        for col, (label, key) in zip(cols, row):
            with col:
                button_type = "primary" if key == "=" else "secondary"
                if st.button(
                    label,
                    key=f"calc_{row_index}_{label}",
                    type=button_type,
                    use_container_width=True,
                ):
                    _handle(state, key)
                    st.rerun()
