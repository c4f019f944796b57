"""
BaseIntakeAdapter — 所有急诊登记数据源 Adapter 的抽象基类。

每个新数据源只需：
1. 继承 BaseIntakeAdapter
2. 实现 transform()（JSON 以外的格式再覆盖 parse()）
3. 在 factory.py 的 _build_registry() 注册一行

业务代码无需任何改动。
"""

import json
from abc import ABC, abstractmethod
from typing import Any

from ..exceptions import ValidationError
from .assembler import assemble_emergency
from .types import AssemblyResult, EmergencyIntakeDraft


class BaseIntakeAdapter(ABC):
    """
    三步流水线：parse → transform → validate

    子类必须实现 transform()；
    parse() 默认按 JSON 对象解析；
    validate() 交给 assembler，失败时把那一条提示包成 ValidationError。
    """

    # 子类声明自己对应的 source 标识符（与 factory 注册键一致）
    source: str = ""

    def __init__(self, raw_body: bytes | str | dict, content_type: str = ""):
        self._raw_body = raw_body
        self._content_type = content_type
        self._parsed: dict = {}

    # ── 提供默认实现，子类可 override ──────────────────────────────────────

    def parse(self) -> Any:
        """原始数据（bytes / str / 已解析的 dict）→ dict，存到 self._parsed。"""
        raw = self._raw_body
        if isinstance(raw, (bytes, str)):
            try:
                raw = json.loads(raw or "{}")
            except (UnicodeDecodeError, json.JSONDecodeError) as exc:
                raise ValidationError(
                    message="Request body is not valid JSON",
                    code="MALFORMED_BODY",
                    detail={"error": str(exc)},
                ) from exc
        if not isinstance(raw, dict):
            raise ValidationError(
                message="Request body must be a JSON object",
                code="MALFORMED_BODY",
            )
        self._parsed = raw
        return raw

    # ── 必须实现 ───────────────────────────────────────────────────────────

    @abstractmethod
    def transform(self) -> EmergencyIntakeDraft:
        """将 self._parsed 映射成 EmergencyIntakeDraft，值保持原始字符串，不做校验。"""

    # ── 校验 ───────────────────────────────────────────────────────────────

    def validate(self, draft: EmergencyIntakeDraft) -> AssemblyResult:
        result = assemble_emergency(draft)
        if not result.ok:
            raise ValidationError(
                message=result.error,
                code="INTAKE_INVALID",
                detail={"field": result.field},
            )
        return result

    # ── 对外统一入口 ───────────────────────────────────────────────────────

    def process(self) -> AssemblyResult:
        """parse → transform → validate，返回校验通过的结果（result.payload 一定存在）。"""
        self.parse()
        draft = self.transform()
        return self.validate(draft)
