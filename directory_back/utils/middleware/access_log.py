import time
import logging
import re
from django.utils.deprecation import MiddlewareMixin

from apps.common.utils import get_client_ip

logger = logging.getLogger('access')


# 접근 로그 기록 대상 경로 패턴 (API 경로만)
ACCESS_LOG_PATTERNS = [
    r'^/api/menus',
    r'^/api/public',
]

# 제외할 경로 (인증, 헬스체크 등)
ACCESS_LOG_EXCLUDE_PATTERNS = [
    r'^/api/auth',
    r'^/api/token',
    r'^/health',
    r'^/static',
]

# 경로 → 메뉴명 매핑
PATH_MENU_MAP = {
    '/api/menus': '메뉴 관리',
    '/api/public/menus': '공개 메뉴',
}


def get_menu_name(path):
    """경로에서 메뉴명 추출 (가장 긴 prefix 우선)"""
    for prefix in sorted(PATH_MENU_MAP, key=len, reverse=True):
        if path.startswith(prefix):
            return PATH_MENU_MAP[prefix]
    return None


def should_log_access(path):
    """접근 로그에 기록할 경로인지 확인"""
    # 제외 패턴 체크
    for pattern in ACCESS_LOG_EXCLUDE_PATTERNS:
        if re.match(pattern, path):
            return False

    # 포함 패턴 체크
    for pattern in ACCESS_LOG_PATTERNS:
        if re.match(pattern, path):
            return True

    return False


class AccessLogMiddleware(MiddlewareMixin):
    """API 요청과 응답을 로깅하는 미들웨어"""

    def process_request(self, request):
        request.start_time = time.time()

    def process_response(self, request, response):
        path = request.get_full_path()
        if not should_log_access(path.split('?')[0]):
            return response

        # 실행 시간 계산
        duration = time.time() - getattr(request, 'start_time', time.time())

        user = getattr(request, 'user', None)
        log_data = {
            'ip': get_client_ip(request),
            'method': request.method,
            'path': path,
            'status': response.status_code,
            'duration': f"{duration:.3f}s",
            'user': str(user) if user is not None and user.is_authenticated else 'Anonymous',
            'menu': get_menu_name(path) or '-',
        }

        message = (
            f"{log_data['ip']} {log_data['user']} [{log_data['menu']}] "
            f"{log_data['method']} {log_data['path']} {log_data['status']} ({log_data['duration']})"
        )

        if response.status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)

        return response
