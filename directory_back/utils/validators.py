"""
공통 검증 유틸리티

목적: 프로젝트 전체에서 사용할 수 있는 재사용 가능한 검증 함수들
"""
import re
from rest_framework import serializers


class ValidationPatterns:
    """검증 정규표현식 패턴"""

    # 사이트 내부 경로 (예: /, /listings, /category/restaurants?page=2, #contact)
    RELATIVE_PATH = r'^(/[^\s]*|#[^\s]*)$'

    # 절대 URL (http, https)
    ABSOLUTE_URL = r'^https?://[^\s/$.?#][^\s]*$'

    # 기타 허용 스킴 (메일, 전화)
    SPECIAL_SCHEME = r'^(mailto|tel):[^\s]+$'


def validate_menu_url(value):
    """
    메뉴 링크 검증

    Args:
        value: 내부 경로 또는 절대 URL 문자열

    Returns:
        앞뒤 공백이 제거된 URL

    Raises:
        serializers.ValidationError: 형식이 올바르지 않은 경우
    """
    if value is None:
        return value

    value = value.strip()
    if not value:
        raise serializers.ValidationError('URL은 비어 있을 수 없습니다.')

    for pattern in (
        ValidationPatterns.RELATIVE_PATH,
        ValidationPatterns.ABSOLUTE_URL,
        ValidationPatterns.SPECIAL_SCHEME,
    ):
        if re.match(pattern, value, re.IGNORECASE):
            return value

    raise serializers.ValidationError(
        'URL 형식이 올바르지 않습니다. (예: /listings 또는 https://example.com)'
    )


def validate_non_blank(value, field_name='값'):
    """
    공백 문자열 검증

    Args:
        value: 문자열 값
        field_name: 필드명 (에러 메시지용)

    Returns:
        앞뒤 공백이 제거된 값

    Raises:
        serializers.ValidationError: 공백만 있는 경우
    """
    if value is None:
        return value

    value = value.strip()
    if not value:
        raise serializers.ValidationError(f'{field_name}은(는) 비어 있을 수 없습니다.')
    return value
