"""
Unit tests for serializer functions.

覆盖 CUIL 状态、payload、等候列表（空 / 失败 / 正常）、登记响应。
"""
from tests.conftest import (
    EmergencyIntakeDraftFactory,
    FakeGateway,
    NurseDraftFactory,
    WaitingListEntryFactory,
)
from urgencias.intake import transition
from urgencias.intake.assembler import assemble_emergency, assemble_nurse
from urgencias.intake.types import SeverityLevel
from urgencias.serializers import (
    serialize_emergency_created,
    serialize_entry,
    serialize_identifier_state,
    serialize_payload,
    serialize_registration,
    serialize_waiting_list,
)
from urgencias.services import WaitingListCollector


class TestSerializeIdentifierState:

    def test_valid(self):
        result = serialize_identifier_state(transition('20172543597'), '20172543597')
        assert result == {'value': '20-17254359-7', 'validity': 'valid', 'digits': '20172543597'}

    def test_partial(self):
        result = serialize_identifier_state(transition('2017'), '2017')
        assert result['value'] == '20-17'
        assert result['validity'] == 'unknown'


class TestSerializePayload:

    def test_english_keys_and_omitted_vitals(self):
        payload = assemble_emergency(EmergencyIntakeDraftFactory(heart_rate='88')).payload
        result = serialize_payload(payload)

        assert result == {
            'patientIdentifier': '20-17254359-7',
            'note': 'chest pain',
            'severity': 'Critica',
            'nurseFirstName': 'Ana',
            'nurseSurname': 'Diaz',
            'nurseIdentifier': '27-00000000-6',
            'heartRate': 88,
        }


class TestSerializeWaitingList:

    def test_empty(self):
        collector = WaitingListCollector(FakeGateway())
        collector.refresh()
        result = serialize_waiting_list(collector)

        assert result == {'count': 0, 'entries': [], 'message': 'No pending intakes'}

    def test_entries(self):
        entry = WaitingListEntryFactory(severity=SeverityLevel.CRITICAL, temperature=39.0)
        collector = WaitingListCollector(FakeGateway(pending=[entry]))
        collector.refresh()
        result = serialize_waiting_list(collector)

        assert result['count'] == 1
        assert 'message' not in result
        assert result['entries'][0]['severity'] == 'Critica'
        assert result['entries'][0]['temperature'] == 39.0

    def test_error_included(self, unreachable):
        collector = WaitingListCollector(FakeGateway(list_error=unreachable))
        collector.refresh()
        result = serialize_waiting_list(collector)

        assert result['error'] == 'Could not reach the server'
        assert result['message'] == 'Could not reach the server'

    def test_raw_severity_label_passed_through(self):
        result = serialize_entry(WaitingListEntryFactory(severity='Azul'))
        assert result['severity'] == 'Azul'
        assert 'temperature' not in result


class TestSerializeCreated:

    def test_emergency_created(self, fake_gateway):
        result = assemble_emergency(EmergencyIntakeDraftFactory(patient_cuil='20-12345678-3'))
        collector = WaitingListCollector(fake_gateway)
        collector.refresh()

        body = serialize_emergency_created(result, collector, 'Emergency intake registered')

        assert body['status'] == 'registered'
        assert body['message'] == 'Emergency intake registered'
        assert body['unverifiedIdentifiers'] == ['patient_cuil']
        assert body['waitingList']['count'] == 0

    def test_registration(self):
        result = assemble_nurse(NurseDraftFactory())
        body = serialize_registration(result, None, 'Nurse registered')

        assert body['record'] == {'cuil': '27-00000000-6', 'apellido': 'Diaz', 'nombre': 'Ana'}
        assert body['backend'] == {}
        assert body['unverifiedIdentifiers'] == []
