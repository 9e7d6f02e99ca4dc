"""Login and sign-up screen."""

import streamlit as st
from loguru import logger
from pydantic import ValidationError

from groomdesk.app.logic.session import AppSession
from groomdesk.core.auth import AuthFailure, Credentials


def render_auth_view(app: AppSession) -> None:
    """Render the login form. Errors are shown inline; a successful sign-in reruns the app."""
    st.title("🐶 Groom Desk")

    is_sign_up = st.toggle("Não tem uma conta? Criar cadastro", key="auth_sign_up")
    st.subheader("Crie sua conta" if is_sign_up else "Bem-vindo de volta")

    with st.form("auth_form"):
        email = st.text_input("Email", placeholder="seu@email.com")
        password = st.text_input("Senha", type="password", placeholder="••••••••")
        submitted = st.form_submit_button(
            "Cadastrar" if is_sign_up else "Entrar",
            type="primary",
            use_container_width=True,
        )

    if not submitted:
        return

    try:
        credentials = Credentials(email=email, password=password)
    except ValidationError as e:
        logger.debug(f"Login form rejected locally: {e.error_count()} errors")
        st.error("Informe um email válido e uma senha com pelo menos 6 caracteres.")
        return

    with st.spinner("Aguarde..."):
        try:
            if is_sign_up:
                st.success(app.sign_up(credentials))
                return
            app.sign_in(credentials)
        except AuthFailure as e:
            st.error(str(e))
            return

    st.rerun()
