from django.contrib import admin
from .models import Menu, MenuItem


class MenuItemInline(admin.TabularInline):
    model = MenuItem
    fields = ["label", "url", "order", "target", "parent"]
    extra = 0
    ordering = ["parent", "order", "id"]


@admin.register(Menu)
class MenuAdmin(admin.ModelAdmin):
    """메뉴(위치) 관리 Admin"""

    list_display = ["name", "location", "created_at"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [MenuItemInline]


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    """메뉴 항목 관리 Admin"""

    list_display = [
        "label",
        "url",
        "menu",
        "parent",
        "order",
        "target",
        "updated_at",
    ]

    list_filter = [
        "menu__location",
        "target",
    ]

    search_fields = [
        "label",
        "url",
    ]

    list_select_related = ["menu", "parent"]
    ordering = ["menu", "parent_id", "order", "id"]
    readonly_fields = ["created_at", "updated_at"]
