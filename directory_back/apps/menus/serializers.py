from rest_framework import serializers

from utils.validators import validate_menu_url, validate_non_blank
from .models import Menu, MenuItem, MenuLocation, MenuTarget


# =============================================================================
# Menu Serializers
# =============================================================================
class MenuSerializer(serializers.ModelSerializer):
    """메뉴(위치) 조회용"""

    class Meta:
        model = Menu
        fields = ["id", "name", "location", "created_at", "updated_at"]
        read_only_fields = fields


class MenuCreateSerializer(serializers.Serializer):
    """메뉴(위치) 생성용 - 중복 위치는 서비스에서 409 처리"""
    name = serializers.CharField(max_length=100)
    location = serializers.ChoiceField(choices=MenuLocation.choices)

    def validate_name(self, value):
        return validate_non_blank(value, "메뉴 이름")


# =============================================================================
# MenuItem Serializers
# =============================================================================
class MenuItemSerializer(serializers.ModelSerializer):
    """메뉴 항목 조회용 (평면 목록 / 트리 노드 공통)"""
    parent_id = serializers.IntegerField(read_only=True, allow_null=True)
    location = serializers.CharField(source="menu.location", read_only=True)

    class Meta:
        model = MenuItem
        fields = [
            "id", "label", "url", "order", "target",
            "parent_id", "location", "created_at", "updated_at",
        ]
        read_only_fields = fields


class MenuItemCreateSerializer(serializers.Serializer):
    """
    메뉴 항목 생성용

    - label, url 필수
    - order 생략 시 같은 부모의 마지막 순서 다음
    - target 생략/빈 값이면 _self
    - parent_id 생략 시 최상위
    """
    label = serializers.CharField(max_length=255)
    url = serializers.CharField(max_length=500)
    order = serializers.IntegerField(required=False, min_value=0)
    target = serializers.ChoiceField(
        choices=MenuTarget.choices, required=False, allow_blank=True, allow_null=True
    )
    parent_id = serializers.IntegerField(required=False, allow_null=True)

    def validate_label(self, value):
        return validate_non_blank(value, "라벨")

    def validate_url(self, value):
        return validate_menu_url(value)

    def validate_target(self, value):
        return value or MenuTarget.SELF


class MenuItemUpdateSerializer(MenuItemCreateSerializer):
    """
    메뉴 항목 부분 수정용

    보내지 않은 필드는 유지, parent_id: null 을 명시하면 최상위로 이동
    """
    label = serializers.CharField(max_length=255, required=False)
    url = serializers.CharField(max_length=500, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("수정할 데이터가 없습니다.")
        return attrs


# =============================================================================
# Reorder Serializers
# =============================================================================
class ReorderItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    order = serializers.IntegerField(min_value=0)


class ReorderSerializer(serializers.Serializer):
    """순서 일괄 변경 (드래그 앤 드롭 결과)"""
    location = serializers.ChoiceField(choices=MenuLocation.choices)
    items = ReorderItemSerializer(many=True, allow_empty=False)

    def validate_items(self, value):
        ids = [item["id"] for item in value]
        if len(ids) != len(set(ids)):
            raise serializers.ValidationError("같은 메뉴 항목이 중복되었습니다.")
        return value


class MoveItemSerializer(serializers.Serializer):
    """같은 부모 안에서 항목 위치 이동"""
    to_index = serializers.IntegerField(min_value=0)
