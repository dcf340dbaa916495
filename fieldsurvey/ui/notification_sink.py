"""StreamlitNotificationSink - shows notifications as Streamlit toasts."""

import logging

import streamlit as st

from fieldsurvey.constants import NotificationConfig
from fieldsurvey.model.notification import Notification

logger = logging.getLogger(__name__)


class StreamlitNotificationSink:
    """Displays each notification with st.toast and logs it."""

    def notify(self, notification: Notification) -> None:
        icon = NotificationConfig.ICONS[notification.type.value]
        logger.info(f"[TOAST] {icon} {notification}")
        st.toast(f"**{notification.title}**  \n{notification.message}", icon=icon)
