"""
HTTP 入口。

View 层只做三件事：取请求数据 → 调 intake / services → 序列化。
所有错误直接 raise，exception_handler 统一格式化，这里不写 try/except。
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from . import cuil
from .exceptions import GatewayError, ValidationError
from .gateway import get_gateway
from .intake import get_adapter, transition
from .intake.types import NurseDraft, PatientDraft
from .serializers import (
    serialize_emergency_created,
    serialize_identifier_state,
    serialize_registration,
    serialize_waiting_list,
)
from .services import (
    SUCCESS_MESSAGE,
    WaitingListCollector,
    register_nurse,
    register_patient,
    submit_and_refresh,
)


def _body(request) -> dict:
    data = request.data
    if not isinstance(data, dict):
        raise ValidationError(
            message="Request body must be a JSON object",
            code="MALFORMED_BODY",
        )
    return data


class CuilFormatView(APIView):
    """POST /api/cuil/format/ - 逐键格式化，返回显示值和 validity"""

    def post(self, request):
        raw = _body(request).get('raw')
        raw = "" if raw is None else str(raw)
        state = transition(raw)
        return Response(serialize_identifier_state(state, cuil.normalize(raw)))


class EmergencyIntakeView(APIView):
    """POST /api/urgencias/ - 校验急诊登记，提交后端，再刷新等候列表"""

    def post(self, request):
        adapter = get_adapter(
            request.headers.get('X-Intake-Source'),
            _body(request),
            content_type=request.content_type,
        )
        result = adapter.process()

        gateway = get_gateway()
        collector = WaitingListCollector(gateway)
        submit_and_refresh(gateway, result.payload, collector)

        return Response(
            serialize_emergency_created(result, collector, SUCCESS_MESSAGE),
            status=status.HTTP_201_CREATED,
        )


class PendingIntakeListView(APIView):
    """GET /api/urgencias/pending/ - 等候列表（后端顺序）"""

    def get(self, request):
        collector = WaitingListCollector(get_gateway())
        if not collector.refresh():
            raise GatewayError(message=collector.error)
        return Response(serialize_waiting_list(collector))


class NurseRegistrationView(APIView):
    """POST /api/enfermeras/ - 护士登记"""

    def post(self, request):
        data = _body(request)
        draft = NurseDraft(
            cuil=data.get('cuil'),
            surname=data.get('apellido'),
            name=data.get('nombre'),
        )
        result, backend = register_nurse(get_gateway(), draft)
        return Response(
            serialize_registration(result, backend, "Nurse registered"),
            status=status.HTTP_201_CREATED,
        )


class PatientRegistrationView(APIView):
    """POST /api/pacientes/ - 患者登记"""

    def post(self, request):
        data = _body(request)
        address = data.get('domicilio') or {}
        if not isinstance(address, dict):
            address = {}
        draft = PatientDraft(
            cuil=data.get('cuil'),
            surname=data.get('apellido'),
            name=data.get('nombre'),
            street=address.get('calle'),
            number=address.get('numero'),
            locality=address.get('localidad'),
            insurer_code=data.get('obraSocialCodigo'),
            affiliate_number=data.get('numeroAfiliado'),
        )
        result, backend = register_patient(get_gateway(), draft)
        return Response(
            serialize_registration(result, backend, "Patient registered"),
            status=status.HTTP_201_CREATED,
        )
