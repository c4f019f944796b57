"""
具体 Gateway 实现。

已注册实现：
  http — HttpIntakeGateway   (requests，直连临床后端 REST API)
"""

import logging

import requests
from django.conf import settings

from ..exceptions import BlockError, GatewayError, ValidationError
from ..intake.types import WaitingListEntry
from .base import BaseIntakeGateway

logger = logging.getLogger(__name__)

UNREACHABLE_MESSAGE = "Could not reach the server"


def extract_error_message(response=None, exc=None) -> str:
    """
    把后端错误压成一句给用户看的话。

    优先级：JSON 里的 message → error（字符串或 {message}）→ detail → 响应正文 → 通用提示。
    """
    if response is None:
        return UNREACHABLE_MESSAGE if exc is not None else "Unexpected error"

    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, dict):
                value = value.get("message")
            if isinstance(value, str) and value.strip():
                return value.strip()

    text = (response.text or "").strip()
    if text and body is None:
        return text
    return f"Request failed with status {response.status_code}"


# ── HttpIntakeGateway ──────────────────────────────────────────────────────
#
# 后端路径：
#   POST /urgencias             急诊登记
#   GET  /urgencias/pendientes  等候列表
#   POST /enfermeras            护士登记
#   POST /pacientes             患者登记
#
# 配置：INTAKE_BACKEND_URL, INTAKE_GATEWAY_TIMEOUT（见 config/settings.py）
# 不做重试：失败直接抛给调用方，由用户决定是否重新提交。

class HttpIntakeGateway(BaseIntakeGateway):

    EMERGENCY_PATH = "/urgencias"
    PENDING_PATH = "/urgencias/pendientes"
    NURSE_PATH = "/enfermeras"
    PATIENT_PATH = "/pacientes"

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or settings.INTAKE_BACKEND_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.INTAKE_GATEWAY_TIMEOUT

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, body: dict | None = None):
        url = self._url(path)
        try:
            if method == "GET":
                response = requests.get(url, timeout=self.timeout)
            else:
                response = requests.post(url, json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise GatewayError(
                message=extract_error_message(exc=exc),
                detail={"url": url},
            ) from exc

        if response.status_code >= 400:
            message = extract_error_message(response)
            logger.warning("%s %s -> %s: %s", method, url, response.status_code, message)
            if response.status_code == 409:
                raise BlockError(message=message)
            if response.status_code < 500:
                raise ValidationError(message=message, code="BACKEND_REJECTED")
            raise GatewayError(message=message, detail={"status": response.status_code})

        logger.info("%s %s -> %s", method, url, response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise GatewayError(
                message="Unexpected response from server",
                code="BACKEND_BAD_RESPONSE",
            ) from exc

    def submit_emergency(self, payload):
        return self._request("POST", self.EMERGENCY_PATH, payload.to_wire()) or {}

    def list_pending(self):
        data = self._request("GET", self.PENDING_PATH)
        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise GatewayError(
                message="Unexpected response from server",
                code="BACKEND_BAD_RESPONSE",
            )
        return [WaitingListEntry.from_wire(item) for item in data]

    def register_nurse(self, payload):
        return self._request("POST", self.NURSE_PATH, payload.to_wire()) or {}

    def register_patient(self, payload):
        return self._request("POST", self.PATIENT_PATH, payload.to_wire()) or {}
