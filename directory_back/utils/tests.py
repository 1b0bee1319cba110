from django.test import SimpleTestCase
from rest_framework import serializers, status
from rest_framework.exceptions import NotAuthenticated, NotFound, PermissionDenied

from .exception_handlers import custom_exception_handler
from .exceptions import ConflictException, ResourceNotFoundException, ValidationException
from .validators import validate_menu_url, validate_non_blank


class ExceptionHandlerTest(SimpleTestCase):
    """공통 에러 응답 형식 테스트"""

    def test_custom_exception(self):
        exc = ValidationException(message="잘못된 값", field="label", detail="blank")
        response = custom_exception_handler(exc, {})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        error = response.data["error"]
        self.assertEqual(error["code"], "ERR_101")
        self.assertEqual(error["message"], "잘못된 값")
        self.assertEqual(error["field"], "label")
        self.assertEqual(error["detail"], "blank")
        self.assertTrue(error["timestamp"].endswith("Z"))

    def test_custom_exception_status_codes(self):
        self.assertEqual(custom_exception_handler(ResourceNotFoundException(), {}).status_code, 404)
        self.assertEqual(custom_exception_handler(ConflictException(), {}).status_code, 409)

    def test_drf_validation_error_field(self):
        exc = serializers.ValidationError({"url": ["URL 형식이 올바르지 않습니다."]})
        response = custom_exception_handler(exc, {})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "ERR_101")
        self.assertEqual(response.data["error"]["field"], "url")
        self.assertEqual(response.data["error"]["detail"], "URL 형식이 올바르지 않습니다.")

    def test_drf_nested_validation_error(self):
        exc = serializers.ValidationError({"items": [{"order": ["필수 항목입니다."]}]})
        response = custom_exception_handler(exc, {})
        self.assertEqual(response.data["error"]["field"], "items")
        self.assertEqual(response.data["error"]["detail"], "필수 항목입니다.")

    def test_drf_not_found(self):
        response = custom_exception_handler(NotFound(), {})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"]["code"], "ERR_201")

    def test_drf_auth_errors(self):
        """401/403은 DRF 예외를 그대로 공통 형식으로 변환"""
        response = custom_exception_handler(NotAuthenticated(), {})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"]["code"], "ERR_001")

        response = custom_exception_handler(PermissionDenied(), {})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"]["code"], "ERR_002")

    def test_unexpected_exception(self):
        with self.assertLogs("utils.exception_handlers", level="ERROR"):
            response = custom_exception_handler(RuntimeError("db down"), {})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["error"]["code"], "ERR_500")


class ValidatorsTest(SimpleTestCase):
    """검증 함수 테스트"""

    def test_menu_url_accepts(self):
        for value in ("/", "/listings", "/category/food?page=2", "#contact",
                      "https://example.com", "http://example.com/a", "mailto:info@example.com",
                      "tel:+4512345678"):
            self.assertEqual(validate_menu_url(value), value)

    def test_menu_url_strips(self):
        self.assertEqual(validate_menu_url("  /about "), "/about")

    def test_menu_url_rejects(self):
        for value in ("", "   ", "listings", "ftp://example.com", "javascript:alert(1)", "/a b"):
            with self.assertRaises(serializers.ValidationError):
                validate_menu_url(value)

    def test_non_blank(self):
        self.assertEqual(validate_non_blank(" Home "), "Home")
        with self.assertRaises(serializers.ValidationError):
            validate_non_blank("   ")
