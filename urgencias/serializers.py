"""
Response serializers — intake 结构 → JSON-able dict。

只负责「输出格式化」，不做任何解析或校验。
输入解析和校验在 urgencias/intake/（adapter + assembler）。
"""

from .intake.types import SeverityLevel

VITAL_KEYS = (
    ("temperature", "temperature"),
    ("heart_rate", "heartRate"),
    ("respiratory_rate", "respiratoryRate"),
    ("systolic", "systolic"),
    ("diastolic", "diastolic"),
)


def _severity_label(severity):
    return severity.value if isinstance(severity, SeverityLevel) else severity


def serialize_identifier_state(state, digits):
    return {
        'value': state.value,
        'validity': state.validity.value,
        'digits': digits,
    }


def serialize_payload(payload):
    """EmergencyIntakePayload → 英文 camelCase；缺省的生命体征不出现。"""
    body = {
        'patientIdentifier': payload.patient_cuil,
        'note': payload.report,
        'severity': payload.severity.value,
        'nurseFirstName': payload.nurse_name,
        'nurseSurname': payload.nurse_surname,
        'nurseIdentifier': payload.nurse_cuil,
    }
    for attr, key in VITAL_KEYS:
        value = getattr(payload, attr)
        if value is not None:
            body[key] = value
    return body


def serialize_entry(entry):
    body = {
        'patientName': entry.patient_name,
        'patientSurname': entry.patient_surname,
        'patientIdentifier': entry.patient_cuil,
        'severity': _severity_label(entry.severity),
        'note': entry.report,
    }
    for attr, key in VITAL_KEYS:
        value = getattr(entry, attr)
        if value is not None:
            body[key] = value
    return body


def serialize_waiting_list(collector):
    """Serialize the collector's last snapshot, plus its single message if any."""
    entries = [serialize_entry(entry) for entry in collector.entries]
    response = {
        'count': len(entries),
        'entries': entries,
    }
    if collector.message:
        response['message'] = collector.message
    if collector.error:
        response['error'] = collector.error
    return response


def serialize_emergency_created(result, collector, message):
    """Serialize a successful intake for the 201 response."""
    return {
        'status': 'registered',
        'message': message,
        'payload': serialize_payload(result.payload),
        'unverifiedIdentifiers': list(result.unverified_identifiers),
        'waitingList': serialize_waiting_list(collector),
    }


def serialize_registration(result, backend_response, message):
    return {
        'status': 'registered',
        'message': message,
        'record': result.payload.to_wire(),
        'unverifiedIdentifiers': list(result.unverified_identifiers),
        'backend': backend_response or {},
    }
