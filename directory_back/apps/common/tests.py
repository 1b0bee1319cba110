from django.conf import settings
from django.contrib.auth import get_user_model
from django.test import RequestFactory, SimpleTestCase, TestCase
from rest_framework import status
from rest_framework.test import APIClient

from .permission import IsAdmin
from .utils import get_client_ip


class HealthCheckTest(TestCase):
    """헬스 체크 테스트"""

    def test_health_check(self):
        response = APIClient().get("/health/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "healthy")
        self.assertEqual(response.data["database"], "connected")
        self.assertEqual(response.data["cache"], "connected")


class IsAdminPermissionTest(TestCase):
    """관리자 권한 테스트"""

    def setUp(self):
        User = get_user_model()
        self.factory = RequestFactory()
        self.staff = User.objects.create_user(username="staff1", password="testpass123", is_staff=True)
        self.member = User.objects.create_user(username="member1", password="testpass123")

    def _check(self, user):
        request = self.factory.get("/")
        request.user = user
        return IsAdmin().has_permission(request, None)

    def test_staff_allowed(self):
        self.assertTrue(self._check(self.staff))

    def test_member_denied(self):
        self.assertFalse(self._check(self.member))

    def test_anonymous_denied(self):
        from django.contrib.auth.models import AnonymousUser
        self.assertFalse(self._check(AnonymousUser()))


class ClientIpTest(SimpleTestCase):

    def test_forwarded_for(self):
        request = RequestFactory().get("/", HTTP_X_FORWARDED_FOR="10.0.0.1, 172.16.0.1")
        self.assertEqual(get_client_ip(request), "10.0.0.1")

    def test_remote_addr(self):
        request = RequestFactory().get("/", REMOTE_ADDR="192.168.0.7")
        self.assertEqual(get_client_ip(request), "192.168.0.7")


class LoggingSettingsTest(SimpleTestCase):
    """로그 설정 테스트"""

    def test_app_loggers_follow_log_level(self):
        for name in ("apps", "utils", "access"):
            self.assertEqual(settings.LOGGING["loggers"][name]["level"], settings.LOG_LEVEL)

    def test_only_used_formatters(self):
        self.assertEqual(set(settings.LOGGING["formatters"]), {"verbose"})
