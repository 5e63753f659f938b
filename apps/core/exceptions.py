import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """서비스 계층 공통 예외: 상태코드 + 메시지 + 응답에 합쳐질 추가 필드"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "请求无效"

    def __init__(self, message=None, **extra):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def as_payload(self) -> dict:
        return {"message": self.message, **self.extra}


class ValidationFailed(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthenticated(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "未授权访问"


class PermissionDenied(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "无权访问此资源"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "资源不存在"


class Conflict(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class InfrastructureError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "服务器内部错误"


def _flatten(detail):
    if isinstance(detail, list):
        return [str(d) for d in detail]
    if isinstance(detail, dict):
        return {k: _flatten(v) for k, v in detail.items()}
    return str(detail)


def api_exception_handler(exc, context):
    if isinstance(exc, ServiceError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__}: {exc.message} {exc.extra}")
        return Response(exc.as_payload(), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        response.data = {"message": "输入验证失败", "errors": _flatten(exc.detail)}
    else:
        detail = response.data.get("detail", "") if isinstance(response.data, dict) else ""
        response.data = {"message": str(detail)}
    return response
