# apps/menus/filters.py
import django_filters
from .models import MenuItem, MenuTarget


# 메뉴 항목 검색 필터 (평면 목록용)
class MenuItemFilter(django_filters.FilterSet):
    label = django_filters.CharFilter(field_name="label", lookup_expr="icontains")
    url = django_filters.CharFilter(field_name="url", lookup_expr="icontains")
    target = django_filters.ChoiceFilter(choices=MenuTarget.choices)
    parent_id = django_filters.NumberFilter(field_name="parent_id")
    is_root = django_filters.BooleanFilter(field_name="parent", lookup_expr="isnull")

    class Meta:
        model = MenuItem
        fields = ["label", "url", "target", "parent_id", "is_root"]
    # /api/menus/header/items/?label=home      → 라벨 검색
    # /api/menus/header/items/?parent_id=3     → 특정 부모의 자식만
    # /api/menus/header/items/?is_root=true    → 최상위 항목만
