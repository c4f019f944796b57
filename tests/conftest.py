"""
Shared fixtures for all tests.

factory-boy factories live here so both unit/ and integration/ can import them.
FakeGateway 代替真实后端：记录调用顺序，可配置失败。
"""
import pytest
from rest_framework.test import APIClient

import factory
from urgencias.exceptions import GatewayError
from urgencias.gateway.base import BaseIntakeGateway
from urgencias.intake.types import (
    EmergencyIntakeDraft,
    NurseDraft,
    PatientDraft,
    WaitingListEntry,
)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

class EmergencyIntakeDraftFactory(factory.Factory):
    class Meta:
        model = EmergencyIntakeDraft

    patient_cuil = '20-17254359-7'
    report = 'chest pain'
    severity = 'Critica'
    nurse_name = 'Ana'
    nurse_surname = 'Diaz'
    nurse_cuil = '27-00000000-6'
    temperature = ''
    heart_rate = ''
    respiratory_rate = ''
    systolic = ''
    diastolic = ''


class NurseDraftFactory(factory.Factory):
    class Meta:
        model = NurseDraft

    cuil = '27-00000000-6'
    surname = 'Diaz'
    name = 'Ana'


class PatientDraftFactory(factory.Factory):
    class Meta:
        model = PatientDraft

    cuil = '20-17254359-7'
    surname = 'Perez'
    name = 'Juan'
    street = 'Av. Siempre Viva'
    number = '742'
    locality = 'San Miguel de Tucuman'
    insurer_code = ''
    affiliate_number = ''


class WaitingListEntryFactory(factory.Factory):
    class Meta:
        model = WaitingListEntry

    patient_name = 'Juan'
    patient_surname = factory.Sequence(lambda n: f'Perez{n}')
    patient_cuil = '20-17254359-7'
    severity = 'Urgencia'
    report = 'fever'


# ---------------------------------------------------------------------------
# Fake gateway
# ---------------------------------------------------------------------------

class FakeGateway(BaseIntakeGateway):
    """内存版 gateway。calls 按发生顺序记录 (方法名, 参数)。"""

    def __init__(self, pending=None, submit_error=None, list_error=None):
        self.pending = list(pending or [])
        self.submit_error = submit_error
        self.list_error = list_error
        self.calls = []

    def submit_emergency(self, payload):
        self.calls.append(('submit_emergency', payload))
        if self.submit_error is not None:
            raise self.submit_error
        return {'ok': True}

    def list_pending(self):
        self.calls.append(('list_pending', None))
        if self.list_error is not None:
            raise self.list_error
        return list(self.pending)

    def register_nurse(self, payload):
        self.calls.append(('register_nurse', payload))
        return payload.to_wire()

    def register_patient(self, payload):
        self.calls.append(('register_patient', payload))
        return payload.to_wire()

    def methods(self):
        return [name for name, _ in self.calls]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def unreachable():
    return GatewayError('Could not reach the server')


@pytest.fixture
def api_client():
    """DRF test client for integration tests."""
    return APIClient()


@pytest.fixture
def sample_form_payload():
    """Minimal valid body for POST /api/urgencias/ (front-end form keys)."""
    return {
        'cuilPaciente': '20-12345678-3',
        'informe': 'chest pain',
        'nivelEmergencia': 'Critica',
        'enfermeraNombre': 'Ana',
        'enfermeraApellido': 'Diaz',
        'enfermeraCuil': '27-00000000-0',
        'temperatura': '37.5',
        'frecuenciaCardiaca': '',
        'frecuenciaRespiratoria': '',
        'tensionSistolica': '',
        'tensionDiastolica': '',
    }
