"""
Draft → Payload 组装与校验。

规则：
1. 必填字段按表单顺序逐个检查，第一个失败就返回，后面不再看。
   这个顺序是刻意的交互约定（用户一次只看到一条提示），不要改成批量报错。
2. 必填全部通过后才解析可选的生命体征；同样是第一个非数字字段就返回。
3. CUIL 只检查非空。校验位不通过只记录到 unverified_identifiers，不阻止提交；
   严格校验是输入框（formatter）那一层的事。

失败永远以数据形式返回（AssemblyResult.error），不抛异常。
"""

import logging
import math
import re

from .. import cuil
from .types import (
    VITAL_SIGNS,
    AssemblyResult,
    EmergencyIntakeDraft,
    EmergencyIntakePayload,
    NurseDraft,
    NursePayload,
    PatientDraft,
    PatientPayload,
    SeverityLevel,
)

logger = logging.getLogger(__name__)

# 只接受十进制写法：可选符号、整数/小数、可选指数。nan / inf / 0x1F / 1_000 / 37,5 都不算
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class NotNumeric(ValueError):
    pass


# ── 共用小工具 ─────────────────────────────────────────────────────────────

def _text(value) -> str:
    return "" if value is None else str(value).strip()


def _present(value) -> bool:
    return bool(_text(value))


def _severity_selected(value) -> bool:
    return SeverityLevel.parse(value) is not None


def _first_failure(draft, checks) -> tuple[str, str] | None:
    """checks: [(属性名, 判定函数, 提示语), ...]，返回第一个不通过的 (属性名, 提示语)。"""
    for attr, predicate, message in checks:
        if not predicate(getattr(draft, attr)):
            return attr, message
    return None


def parse_optional_number(value):
    """
    空白 → None；合法数字 → int / float；其他 → NotNumeric。

    没有小数点和指数的按 int 返回（心率 80 就是 80，不是 80.0）。
    """
    text = _text(value)
    if not text:
        return None
    if not _NUMBER_RE.fullmatch(text):
        raise NotNumeric(text)
    if _INTEGER_RE.fullmatch(text):
        try:
            return int(text)
        except ValueError as exc:
            # 超出 int 字符串转换的位数上限
            raise NotNumeric(text) from exc
    number = float(text)
    if not math.isfinite(number):
        raise NotNumeric(text)
    return number


def _unverified(draft, attrs) -> tuple[str, ...]:
    flagged = []
    for attr in attrs:
        value = _text(getattr(draft, attr))
        if not cuil.is_valid_formatted(value):
            logger.warning("CUIL checksum not verified for %s (%s)", attr, cuil.mask(value))
            flagged.append(attr)
    return tuple(flagged)


# ── 急诊登记 ────────────────────────────────────────────────────────────────

EMERGENCY_REQUIRED = (
    ("patient_cuil", _present, "Patient CUIL is required"),
    ("report", _present, "Clinical report is required"),
    ("severity", _severity_selected, "Select an emergency level"),
    ("nurse_name", _present, "Nurse name is required"),
    ("nurse_surname", _present, "Nurse surname is required"),
    ("nurse_cuil", _present, "Nurse CUIL is required"),
)


def assemble_emergency(draft: EmergencyIntakeDraft) -> AssemblyResult:
    missing = _first_failure(draft, EMERGENCY_REQUIRED)
    if missing:
        attr, message = missing
        return AssemblyResult(error=message, field=attr)

    vitals = {}
    for attr, _, label in VITAL_SIGNS:
        try:
            vitals[attr] = parse_optional_number(getattr(draft, attr))
        except NotNumeric:
            return AssemblyResult(error=f"{label} must be numeric", field=attr)

    payload = EmergencyIntakePayload(
        patient_cuil=_text(draft.patient_cuil),
        report=_text(draft.report),
        severity=SeverityLevel.parse(draft.severity),
        nurse_name=_text(draft.nurse_name),
        nurse_surname=_text(draft.nurse_surname),
        nurse_cuil=_text(draft.nurse_cuil),
        **vitals,
    )
    return AssemblyResult(
        payload=payload,
        unverified_identifiers=_unverified(draft, ("patient_cuil", "nurse_cuil")),
    )


# ── 护士登记 ────────────────────────────────────────────────────────────────

NURSE_REQUIRED = (
    ("cuil", _present, "CUIL is required"),
    ("surname", _present, "Surname is required"),
    ("name", _present, "Name is required"),
)


def assemble_nurse(draft: NurseDraft) -> AssemblyResult:
    missing = _first_failure(draft, NURSE_REQUIRED)
    if missing:
        attr, message = missing
        return AssemblyResult(error=message, field=attr)

    payload = NursePayload(
        cuil=_text(draft.cuil),
        surname=_text(draft.surname),
        name=_text(draft.name),
    )
    return AssemblyResult(payload=payload, unverified_identifiers=_unverified(draft, ("cuil",)))


# ── 患者登记 ────────────────────────────────────────────────────────────────

PATIENT_REQUIRED = (
    ("cuil", _present, "CUIL is required"),
    ("surname", _present, "Surname is required"),
    ("name", _present, "Name is required"),
    ("street", _present, "Street is required"),
    ("number", _present, "Street number is required"),
    ("locality", _present, "Locality is required"),
)


def assemble_patient(draft: PatientDraft) -> AssemblyResult:
    missing = _first_failure(draft, PATIENT_REQUIRED)
    if missing:
        attr, message = missing
        return AssemblyResult(error=message, field=attr)

    number = _text(draft.number)
    try:
        number = int(number) if _INTEGER_RE.fullmatch(number) else None
    except ValueError:
        # 超出 int 字符串转换的位数上限
        number = None
    if number is None:
        return AssemblyResult(error="Street number must be a whole number", field="number")

    payload = PatientPayload(
        cuil=_text(draft.cuil),
        surname=_text(draft.surname),
        name=_text(draft.name),
        street=_text(draft.street),
        number=number,
        locality=_text(draft.locality),
        insurer_code=_text(draft.insurer_code) or None,
        affiliate_number=_text(draft.affiliate_number) or None,
    )
    return AssemblyResult(payload=payload, unverified_identifiers=_unverified(draft, ("cuil",)))
