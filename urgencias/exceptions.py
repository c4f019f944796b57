"""
统一异常体系。

所有业务异常继承 BaseAppException，包含：
- type:        错误类型标识（validation_error / block / gateway_error）
- code:        业务错误码（INTAKE_INVALID / UNKNOWN_SOURCE / BACKEND_CONFLICT / ...）
- message:     人类可读的描述，前端直接展示，一次只有一条
- detail:      可选的附加信息（dict / list / None）
- http_status: HTTP 状态码

注意：intake 核心（cuil / formatter / assembler）从不抛这些异常，
失败都以数据返回。只有 HTTP 边界（adapter / gateway / view）才 raise，
exception_handler 统一捕获并格式化响应。
"""


class BaseAppException(Exception):
    """所有业务异常的基类。"""

    type = 'error'
    code = 'UNKNOWN_ERROR'
    http_status = 500

    def __init__(self, message, code=None, detail=None, http_status=None):
        self.message = message
        if code is not None:
            self.code = code
        if http_status is not None:
            self.http_status = http_status
        self.detail = detail
        super().__init__(message)


class ValidationError(BaseAppException):
    """输入验证失败。adapter / view 层抛出，400。"""

    type = 'validation_error'
    code = 'VALIDATION_ERROR'
    http_status = 400


class BlockError(BaseAppException):
    """后端拒绝操作（例如 CUIL 已登记）。gateway 抛出，409。"""

    type = 'block'
    code = 'BACKEND_CONFLICT'
    http_status = 409


class GatewayError(BaseAppException):
    """
    后端不可达或返回了错误。

    message 已经是可以直接展示给用户的一句话（见 gateway.clients.extract_error_message），
    调用方不需要再解析。
    """

    type = 'gateway_error'
    code = 'BACKEND_UNAVAILABLE'
    http_status = 502
