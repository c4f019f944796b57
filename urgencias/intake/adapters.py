"""
具体 Adapter 实现。

新增数据源：在此文件添加一个类，然后在 factory.py 注册即可。

已注册数据源：
  form  — UrgenciaFormAdapter   (前端表单，西语 camelCase)
  api   — IntakeApiAdapter      (外部系统，英文 camelCase)
"""

from .base import BaseIntakeAdapter
from .types import EmergencyIntakeDraft


def _raw(value) -> str:
    # 原样保留用户输入；None → ""，数字 → 字符串，strip 交给 assembler
    return "" if value is None else str(value)


# ── UrgenciaFormAdapter ────────────────────────────────────────────────────
#
# 前端「Registro de Urgencias」表单提交的格式（JSON）：
# {
#   "cuilPaciente":           "20-12345678-3",
#   "informe":                "Dolor torácico",
#   "nivelEmergencia":        "Critica",
#   "enfermeraNombre":        "Ana",
#   "enfermeraApellido":      "Diaz",
#   "enfermeraCuil":          "27-00000000-0",
#   "temperatura":            "37.5",        ← 生命体征都是字符串，可以为空
#   "frecuenciaCardiaca":     "",
#   "frecuenciaRespiratoria": "",
#   "tensionSistolica":       "",
#   "tensionDiastolica":      ""
# }

class UrgenciaFormAdapter(BaseIntakeAdapter):
    source = "form"

    def transform(self) -> EmergencyIntakeDraft:
        raw = self._parsed
        return EmergencyIntakeDraft(
            patient_cuil=_raw(raw.get("cuilPaciente")),
            report=_raw(raw.get("informe")),
            severity=_raw(raw.get("nivelEmergencia")),
            nurse_name=_raw(raw.get("enfermeraNombre")),
            nurse_surname=_raw(raw.get("enfermeraApellido")),
            nurse_cuil=_raw(raw.get("enfermeraCuil")),
            temperature=_raw(raw.get("temperatura")),
            heart_rate=_raw(raw.get("frecuenciaCardiaca")),
            respiratory_rate=_raw(raw.get("frecuenciaRespiratoria")),
            systolic=_raw(raw.get("tensionSistolica")),
            diastolic=_raw(raw.get("tensionDiastolica")),
        )


# ── IntakeApiAdapter ───────────────────────────────────────────────────────
#
# 外部系统直接推送的格式（JSON，英文命名）：
# {
#   "patientIdentifier": "20-12345678-3",
#   "note":              "chest pain",
#   "severity":          "Critica",
#   "nurseFirstName":    "Ana",
#   "nurseSurname":      "Diaz",
#   "nurseIdentifier":   "27-00000000-0",
#   "temperature":       37.5,              ← 可能直接是数字
#   "heartRate":         null,
#   "respiratoryRate":   "",
#   "systolic":          "",
#   "diastolic":         ""
# }
#
# 与表单格式的主要差异：
#   1. 字段名是英文
#   2. 生命体征可能是 JSON 数字或 null，不一定是字符串

class IntakeApiAdapter(BaseIntakeAdapter):
    source = "api"

    def transform(self) -> EmergencyIntakeDraft:
        raw = self._parsed
        return EmergencyIntakeDraft(
            patient_cuil=_raw(raw.get("patientIdentifier")),
            report=_raw(raw.get("note")),
            severity=_raw(raw.get("severity")),
            nurse_name=_raw(raw.get("nurseFirstName")),
            nurse_surname=_raw(raw.get("nurseSurname")),
            nurse_cuil=_raw(raw.get("nurseIdentifier")),
            temperature=_raw(raw.get("temperature")),
            heart_rate=_raw(raw.get("heartRate")),
            respiratory_rate=_raw(raw.get("respiratoryRate")),
            systolic=_raw(raw.get("systolic")),
            diastolic=_raw(raw.get("diastolic")),
        )
