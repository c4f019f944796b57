"""
业务流程：提交 + 刷新等候列表，以及表单会话状态。

intake 核心（assembler）只负责校验；这里负责"校验通过之后做什么"：
  1. 调 gateway 提交
  2. 提交完成之后（严格在之后）刷新等候列表
  3. 成功则清空表单
"""

import logging

from .exceptions import BaseAppException, ValidationError
from .intake import CuilInput, assemble_emergency, assemble_nurse, assemble_patient
from .intake.types import AssemblyResult, EmergencyIntakeDraft, NurseDraft, PatientDraft

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Emergency intake registered"
EMPTY_WAITING_LIST_MESSAGE = "No pending intakes"


class WaitingListCollector:
    """
    等候列表的最近一次快照。

    - 空列表不是错误，message 显示 "No pending intakes"
    - 拉取失败：error 记一条消息，entries 保持上一次成功的结果
    - 顺序按后端返回，不按严重程度重排
    """

    def __init__(self, gateway):
        self.gateway = gateway
        self.entries = []
        self.error = None

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def message(self) -> str | None:
        if self.error:
            return self.error
        return EMPTY_WAITING_LIST_MESSAGE if self.is_empty else None

    def refresh(self) -> bool:
        try:
            entries = self.gateway.list_pending()
        except BaseAppException as exc:
            logger.warning("Waiting list refresh failed: %s", exc.message)
            self.error = exc.message
            return False

        self.entries = list(entries)
        self.error = None
        logger.info("Waiting list refreshed: %d pending", len(self.entries))
        return True


def submit_and_refresh(gateway, payload, collector: WaitingListCollector) -> dict:
    """
    先提交，提交返回之后再刷新列表；提交失败直接抛出，列表不动。

    payload 必须是 assembler 产出的；这里不会再校验一遍。
    """
    response = gateway.submit_emergency(payload)
    logger.info("Emergency intake submitted (severity=%s)", payload.severity.value)
    collector.refresh()
    return response


def _require(result: AssemblyResult) -> AssemblyResult:
    if not result.ok:
        raise ValidationError(
            message=result.error,
            code="INTAKE_INVALID",
            detail={"field": result.field},
        )
    return result


def register_nurse(gateway, draft: NurseDraft) -> tuple[AssemblyResult, dict]:
    result = _require(assemble_nurse(draft))
    return result, gateway.register_nurse(result.payload)


def register_patient(gateway, draft: PatientDraft) -> tuple[AssemblyResult, dict]:
    result = _require(assemble_patient(draft))
    return result, gateway.register_patient(result.payload)


class EmergencyIntakeSession:
    """
    急诊登记表单的一次会话。

    同一时间只有一条提示：success_message 和 error_message 不会同时有值。
    两个 CUIL 字段各有一个 CuilInput，输入经过它格式化后才写进 draft。
    """

    CUIL_FIELDS = ("patient_cuil", "nurse_cuil")

    def __init__(self, gateway, waiting_list: WaitingListCollector | None = None):
        self.gateway = gateway
        self.waiting_list = waiting_list or WaitingListCollector(gateway)
        self.draft = EmergencyIntakeDraft()
        self.cuil_inputs = {name: CuilInput() for name in self.CUIL_FIELDS}
        self.success_message = None
        self.error_message = None
        self._pending_payload = None

    @property
    def has_data(self) -> bool:
        return self.draft.has_data()

    def update(self, **changes) -> None:
        for name, value in changes.items():
            if not hasattr(self.draft, name):
                raise AttributeError(f"Unknown intake field: {name!r}")
            if name in self.cuil_inputs:
                value = self.cuil_inputs[name].handle_change(value).value
            setattr(self.draft, name, value)

    def clear(self) -> None:
        self.draft = EmergencyIntakeDraft()
        for cuil_input in self.cuil_inputs.values():
            cuil_input.reset()
        self.success_message = None
        self.error_message = None
        self._pending_payload = None

    def _show_error(self, message: str) -> None:
        self.success_message = None
        self.error_message = message

    def submit(self) -> bool:
        self.success_message = None
        self.error_message = None
        self._pending_payload = None

        result = assemble_emergency(self.draft)
        if not result.ok:
            self._show_error(result.error)
            return False
        return self._send(result.payload)

    def resubmit(self) -> bool:
        """
        重新发送上一次提交失败的 payload。

        不重新校验、不读 draft：payload 原样再发一次。没有待重发的就返回 False。
        """
        if self._pending_payload is None:
            return False
        return self._send(self._pending_payload)

    def _send(self, payload) -> bool:
        try:
            submit_and_refresh(self.gateway, payload, self.waiting_list)
        except BaseAppException as exc:
            self._pending_payload = payload
            self._show_error(exc.message)
            return False

        self.clear()
        self.success_message = SUCCESS_MESSAGE
        return True
