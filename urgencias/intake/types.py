"""
Intake 层的标准数据结构。

Draft   — 表单草稿，所有字段都是用户输入的原始字符串，未校验。
Payload — assembler 校验通过后的结果，不可变，交给 gateway 提交。

业务层（services.py / views.py）只消费这些结构；
与后端之间的 JSON 字段名（西语 camelCase）只在 to_wire() / from_wire() 里出现。
"""

import enum
import functools
from dataclasses import dataclass
from typing import Any


class Validity(enum.Enum):
    UNKNOWN = "unknown"
    VALID = "valid"
    INVALID = "invalid"


@functools.total_ordering
class SeverityLevel(enum.Enum):
    """
    急诊分级，封闭集合。value 就是后端认识的标签。

    比较按严重程度：CRITICAL > EMERGENCY > ... > NON_URGENT。
    目前等候列表不按它排序，保留给以后用。
    """

    CRITICAL = "Critica"
    EMERGENCY = "Emergencia"
    URGENT = "Urgencia"
    MINOR_URGENT = "Urgencia Menor"
    NON_URGENT = "Sin Urgencia"

    @property
    def rank(self) -> int:
        # 0 = 最严重
        return list(SeverityLevel).index(self)

    def __lt__(self, other):
        if not isinstance(other, SeverityLevel):
            return NotImplemented
        return self.rank > other.rank

    @classmethod
    def parse(cls, value: Any) -> "SeverityLevel | None":
        """枚举成员或其标签 → 成员；其他一律 None。"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip())
            except ValueError:
                return None
        return None


@dataclass(frozen=True)
class FormattedIdentifierState:
    value: str = ""
    validity: Validity = Validity.UNKNOWN


INITIAL_IDENTIFIER_STATE = FormattedIdentifierState()


# ── 急诊登记 ────────────────────────────────────────────────────────────────

@dataclass
class EmergencyIntakeDraft:
    patient_cuil: str = ""
    report: str = ""
    severity: Any = ""                     # "" = 未选择；也接受 SeverityLevel
    nurse_name: str = ""
    nurse_surname: str = ""
    nurse_cuil: str = ""
    temperature: str = ""
    heart_rate: str = ""
    respiratory_rate: str = ""
    systolic: str = ""
    diastolic: str = ""

    def has_data(self) -> bool:
        return self != EmergencyIntakeDraft()


# 生命体征字段：(属性名, 后端字段名, 报错用标签)，顺序就是校验顺序
VITAL_SIGNS = (
    ("temperature", "temperatura", "Temperature"),
    ("heart_rate", "frecuenciaCardiaca", "Heart rate"),
    ("respiratory_rate", "frecuenciaRespiratoria", "Respiratory rate"),
    ("systolic", "tensionSistolica", "Systolic pressure"),
    ("diastolic", "tensionDiastolica", "Diastolic pressure"),
)


@dataclass(frozen=True)
class EmergencyIntakePayload:
    """
    校验通过的急诊登记。

    必填字段已 strip；生命体征要么是数字，要么是 None（缺省），
    永远不会是空字符串。
    """

    patient_cuil: str
    report: str
    severity: SeverityLevel
    nurse_name: str
    nurse_surname: str
    nurse_cuil: str
    temperature: float | int | None = None
    heart_rate: float | int | None = None
    respiratory_rate: float | int | None = None
    systolic: float | int | None = None
    diastolic: float | int | None = None

    def to_wire(self) -> dict:
        body = {
            "cuilPaciente": self.patient_cuil,
            "informe": self.report,
            "nivelEmergencia": self.severity.value,
            "enfermeraNombre": self.nurse_name,
            "enfermeraApellido": self.nurse_surname,
            "enfermeraCuil": self.nurse_cuil,
        }
        for attr, wire_key, _ in VITAL_SIGNS:
            value = getattr(self, attr)
            if value is not None:
                body[wire_key] = value
        return body


@dataclass(frozen=True)
class WaitingListEntry:
    """
    等候列表的一行，只读展示用。

    数据完全来自后端，不做校验；不认识的分级标签原样保留成字符串。
    """

    patient_name: str = ""
    patient_surname: str = ""
    patient_cuil: str = ""
    severity: Any = ""
    report: str = ""
    temperature: float | int | None = None
    heart_rate: float | int | None = None
    respiratory_rate: float | int | None = None
    systolic: float | int | None = None
    diastolic: float | int | None = None

    @classmethod
    def from_wire(cls, raw: dict) -> "WaitingListEntry":
        raw = raw or {}
        label = raw.get("nivelEmergencia") or ""
        vitals = {attr: raw.get(wire_key) for attr, wire_key, _ in VITAL_SIGNS}
        return cls(
            patient_name=raw.get("nombrePaciente") or "",
            patient_surname=raw.get("apellidoPaciente") or "",
            patient_cuil=raw.get("cuilPaciente") or "",
            severity=SeverityLevel.parse(label) or label,
            report=raw.get("informe") or "",
            **vitals,
        )


# ── 护士 / 患者登记 ─────────────────────────────────────────────────────────

@dataclass
class NurseDraft:
    cuil: str = ""
    surname: str = ""
    name: str = ""


@dataclass(frozen=True)
class NursePayload:
    cuil: str
    surname: str
    name: str

    def to_wire(self) -> dict:
        return {"cuil": self.cuil, "apellido": self.surname, "nombre": self.name}


@dataclass
class PatientDraft:
    cuil: str = ""
    surname: str = ""
    name: str = ""
    street: str = ""
    number: str = ""
    locality: str = ""
    insurer_code: str = ""
    affiliate_number: str = ""


@dataclass(frozen=True)
class PatientPayload:
    cuil: str
    surname: str
    name: str
    street: str
    number: int
    locality: str
    insurer_code: str | None = None
    affiliate_number: str | None = None

    def to_wire(self) -> dict:
        body = {
            "cuil": self.cuil,
            "apellido": self.surname,
            "nombre": self.name,
            "domicilio": {
                "calle": self.street,
                "numero": self.number,
                "localidad": self.locality,
            },
        }
        if self.insurer_code is not None:
            body["obraSocialCodigo"] = self.insurer_code
        if self.affiliate_number is not None:
            body["numeroAfiliado"] = self.affiliate_number
        return body


# ── 校验结果 ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AssemblyResult:
    """
    assembler 的返回值：payload 和 error 二选一。

    error  面向用户的一句话；field 是出错字段的属性名，便于前端定位。
    unverified_identifiers  校验位没通过的 CUIL 字段，仅作提示，不阻止提交。
    """

    payload: Any = None
    error: str | None = None
    field: str | None = None
    unverified_identifiers: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None
