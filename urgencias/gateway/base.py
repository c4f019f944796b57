"""
BaseIntakeGateway — 与临床后端通信的抽象基类。

intake 核心只定义"发什么、收什么"，真正的网络调用都在 Gateway 里。
每个新实现只需：
1. 继承 BaseIntakeGateway
2. 实现下面四个方法
3. 在 factory.py 的 _build_registry() 注册一行

services.py / views.py 完全不知道背后是 HTTP 还是别的什么。
"""

from abc import ABC, abstractmethod

from ..intake.types import (
    EmergencyIntakePayload,
    NursePayload,
    PatientPayload,
    WaitingListEntry,
)


class BaseIntakeGateway(ABC):

    @abstractmethod
    def submit_emergency(self, payload: EmergencyIntakePayload) -> dict:
        """
        提交一条已校验的急诊登记。

        Returns:
            后端返回的 JSON（可能为空 dict）

        Raises:
            GatewayError / BlockError / ValidationError: message 可直接展示给用户
        """

    @abstractmethod
    def list_pending(self) -> list[WaitingListEntry]:
        """拉取等候列表。顺序按后端返回，不重排。"""

    @abstractmethod
    def register_nurse(self, payload: NursePayload) -> dict:
        """登记护士。"""

    @abstractmethod
    def register_patient(self, payload: PatientPayload) -> dict:
        """登记患者。"""
