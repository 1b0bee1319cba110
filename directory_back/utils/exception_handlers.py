from rest_framework.views import exception_handler
from rest_framework.response import Response
from .exceptions import DirectoryException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)


def _now():
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


def _first_error(errors):
    """중첩된 ValidationError 구조에서 첫 번째 메시지 추출"""
    while isinstance(errors, (list, dict)):
        if not errors:
            return ''
        errors = errors[0] if isinstance(errors, list) else next(iter(errors.values()))
    return str(errors)


def custom_exception_handler(exc, context):
    """DRF 기본 핸들러 + 디렉토리 커스텀 핸들러"""

    # 커스텀 예외 처리
    if isinstance(exc, DirectoryException):
        logger.warning(f"Directory Exception: {exc.code} - {exc.message}", extra={
            'code': exc.code,
            'detail': exc.detail_info,
            'field': exc.field,
            'view': context.get('view'),
            'request': context.get('request')
        })
        return Response(exc.get_full_details(), status=exc.status_code)

    # DRF 기본 예외 처리 (ValidationError, NotFound 등)
    response = exception_handler(exc, context)

    if response is not None:
        data = response.data
        message = '요청 처리 중 오류가 발생했습니다.'
        if isinstance(data, dict) and 'detail' in data:
            message = str(data['detail'])

        error_detail = {
            'error': {
                'code': 'ERR_500',
                'message': message,
                'timestamp': _now()
            }
        }

        if response.status_code == 404:
            error_detail['error']['code'] = 'ERR_201'
        elif response.status_code in (401, 403):
            error_detail['error']['code'] = 'ERR_001' if response.status_code == 401 else 'ERR_002'

        # ValidationError의 경우 field 정보 포함
        if isinstance(data, dict):
            for field, errors in data.items():
                if field != 'detail':
                    error_detail['error']['field'] = field
                    error_detail['error']['detail'] = _first_error(errors)
                    error_detail['error']['code'] = 'ERR_101'
                    break
        elif isinstance(data, list):
            error_detail['error']['detail'] = _first_error(data)
            error_detail['error']['code'] = 'ERR_101'

        response.data = error_detail
        logger.warning(f"DRF Exception: {error_detail['error']['code']} - {error_detail['error']['message']}")
        return response

    # 예상치 못한 예외 (500 에러)
    logger.error(f"Unexpected Exception: {str(exc)}", exc_info=True, extra={
        'view': context.get('view'),
        'request': context.get('request')
    })

    return Response({
        'error': {
            'code': 'ERR_500',
            'message': '서버 내부 오류가 발생했습니다. 관리자에게 문의해주세요.',
            'timestamp': _now()
        }
    }, status=500)
