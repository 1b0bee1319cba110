import logging

from django.db import transaction
from django.db.models import Max
from django.utils import timezone

from utils.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from .cache import clear_menu_cache, get_cached_menu_tree
from .models import Menu, MenuItem, MenuLocation
from .serializers import MenuItemSerializer
from .utils import build_menu_tree, get_parent_options
from .utils import move_item as move_in_list

logger = logging.getLogger(__name__)


def _invalidate(location):
    # 캐시 삭제는 커밋 이후에
    transaction.on_commit(lambda: clear_menu_cache(location))


class MenuService:
    """헤더/푸터 메뉴 관리 비즈니스 로직"""

    # =========================================================================
    # Menu (위치)
    # =========================================================================
    @staticmethod
    def validate_location(location):
        """header / footer 외의 위치는 저장소 접근 전에 거부"""
        if location not in MenuLocation.values:
            raise ValidationException(
                message=f"잘못된 메뉴 위치입니다: {location}",
                detail=f"허용 값: {', '.join(MenuLocation.values)}",
                field="location",
            )
        return location

    @staticmethod
    def get_or_create_menu(location):
        """위치별 메뉴 조회 (없으면 생성)"""
        MenuService.validate_location(location)
        menu, created = Menu.objects.get_or_create(
            location=location,
            defaults={"name": Menu.default_name(location)},
        )
        if created:
            logger.info(f"메뉴 생성: location={location}, name={menu.name}")
        return menu

    @staticmethod
    def list_menus():
        return Menu.objects.all().order_by("name")

    @staticmethod
    @transaction.atomic
    def create_menu(name, location):
        """메뉴 생성 (위치당 1개)"""
        MenuService.validate_location(location)
        if Menu.objects.filter(location=location).exists():
            raise ConflictException(
                message=f"Menu location '{location}' already exists.",
                field="location",
            )
        menu = Menu.objects.create(name=name, location=location)
        logger.info(f"메뉴 생성: location={location}, name={name}")
        return menu

    # =========================================================================
    # 조회
    # =========================================================================
    @staticmethod
    def list_items(location):
        """위치별 평면 목록 (order, id 순)"""
        MenuService.validate_location(location)
        return (
            MenuItem.objects
            .filter(menu__location=location)
            .select_related("menu")
            .order_by("order", "id")
        )

    @staticmethod
    def get_menu_tree(location):
        """위치별 트리 (매 요청마다 새로 구성)"""
        items = MenuService.list_items(location)
        return build_menu_tree(MenuItemSerializer(items, many=True).data)

    @staticmethod
    def get_public_menu_tree(location):
        """공개 페이지용 트리 (캐시)"""
        MenuService.validate_location(location)
        return get_cached_menu_tree(location, MenuService.get_menu_tree)

    @staticmethod
    def get_parent_options(location, current_item_id=None):
        """상위 메뉴 후보 (수정 중인 항목과 그 하위 항목 제외)"""
        tree = MenuService.get_menu_tree(location)
        return get_parent_options(tree, current_item_id)

    @staticmethod
    def get_item(item_id):
        try:
            return MenuItem.objects.select_related("menu").get(pk=item_id)
        except MenuItem.DoesNotExist:
            raise ResourceNotFoundException(
                message=f"Menu item with ID {item_id} not found.",
            )

    @staticmethod
    def list_siblings(item):
        return (
            MenuItem.objects
            .filter(menu_id=item.menu_id, parent_id=item.parent_id)
            .select_related("menu")
            .order_by("order", "id")
        )

    # =========================================================================
    # 내부 헬퍼
    # =========================================================================
    @staticmethod
    def _lock_item(item_id):
        """수정할 항목을 잠그고 조회"""
        try:
            return MenuItem.objects.select_for_update().select_related("menu").get(pk=item_id)
        except MenuItem.DoesNotExist:
            raise ResourceNotFoundException(
                message=f"Menu item with ID {item_id} not found.",
            )

    @staticmethod
    def _lock_parent_links(menu_id):
        """위치 내 전체 항목을 id 순으로 잠그고 {id: parent_id} 반환"""
        return dict(
            MenuItem.objects.select_for_update()
            .filter(menu_id=menu_id)
            .order_by("id")
            .values_list("id", "parent_id")
        )

    @staticmethod
    def _creates_cycle(parent_links, item_id, parent_id):
        """parent_id에서 위로 올라가다 item_id를 만나면 순환"""
        current = parent_id
        seen = set()
        while current is not None and current not in seen:
            if current == item_id:
                return True
            seen.add(current)
            current = parent_links.get(current)
        return False

    @staticmethod
    def _resolve_parent(menu, parent_id, item=None):
        """
        parent_id 검증 후 부모 항목 반환

        - 존재하는 항목이어야 함
        - 같은 위치(menu)여야 함
        - 수정 시 자기 자신 또는 하위 항목은 부모가 될 수 없음 (순환 방지)

        수정 시에는 위치 내 항목을 잠근 상태의 부모 관계로 순환을 검사한다.
        """
        if parent_id is None:
            return None

        try:
            parent = MenuItem.objects.get(pk=parent_id)
        except MenuItem.DoesNotExist:
            raise ValidationException(
                message=f"Parent menu item with ID {parent_id} not found.",
                field="parent_id",
            )

        if parent.menu_id != menu.id:
            raise ValidationException(
                message="상위 메뉴는 같은 위치의 항목이어야 합니다.",
                detail=f"parent location differs from {menu.location}",
                field="parent_id",
            )

        if item is not None:
            parent_links = MenuService._lock_parent_links(menu.id)
            if MenuService._creates_cycle(parent_links, item.id, parent.id):
                raise ValidationException(
                    message="자기 자신이나 하위 메뉴를 상위 메뉴로 지정할 수 없습니다.",
                    field="parent_id",
                )

        return parent

    @staticmethod
    def _next_order(menu, parent):
        """같은 부모 아래 마지막 순서 다음 값"""
        last = (
            MenuItem.objects
            .filter(menu=menu, parent=parent)
            .aggregate(max_order=Max("order"))["max_order"]
        )
        return 0 if last is None else last + 1

    # =========================================================================
    # 생성 / 수정 / 삭제
    # =========================================================================
    @staticmethod
    @transaction.atomic
    def create_item(location, data):
        """메뉴 항목 생성"""
        menu = MenuService.get_or_create_menu(location)
        parent = MenuService._resolve_parent(menu, data.get("parent_id"))

        order = data.get("order")
        if order is None:
            order = MenuService._next_order(menu, parent)

        item = MenuItem.objects.create(
            menu=menu,
            label=data["label"],
            url=data["url"],
            order=order,
            target=data.get("target") or MenuItem._meta.get_field("target").default,
            parent=parent,
        )
        _invalidate(location)
        logger.info(f"메뉴 항목 생성: id={item.id}, location={location}, parent_id={item.parent_id}")
        return item

    @staticmethod
    @transaction.atomic
    def update_item(item_id, data):
        """메뉴 항목 부분 수정 (보내지 않은 필드는 유지)"""
        item = MenuService._lock_item(item_id)
        changed = {"updated_at"}

        if "parent_id" in data:
            new_parent = MenuService._resolve_parent(item.menu, data["parent_id"], item)
            if new_parent != item.parent and data.get("order") is None:
                # 부모가 바뀌면 새 부모의 마지막으로
                item.order = MenuService._next_order(item.menu, new_parent)
                changed.add("order")
            item.parent = new_parent
            changed.add("parent")

        for field in ("label", "url", "order", "target"):
            if data.get(field) is not None:
                setattr(item, field, data[field])
                changed.add(field)

        # 변경된 필드만 저장
        item.save(update_fields=sorted(changed))
        _invalidate(item.location)
        logger.info(f"메뉴 항목 수정: id={item.id}, fields={sorted(data.keys())}")
        return item

    @staticmethod
    @transaction.atomic
    def delete_item(item_id):
        """
        메뉴 항목 삭제

        하위 항목도 함께 삭제된다 (parent FK on_delete=CASCADE).
        """
        item = MenuService.get_item(item_id)
        location = item.location
        deleted, _ = item.delete()
        _invalidate(location)
        logger.info(f"메뉴 항목 삭제: id={item_id}, location={location}, deleted_rows={deleted}")
        return deleted

    # =========================================================================
    # 순서 변경
    # =========================================================================
    @staticmethod
    def reorder(location, items):
        """
        순서 일괄 변경 (all-or-nothing)

        items: [{"id": 1, "order": 0}, ...]
        하나라도 없는 id가 있거나 다른 위치의 항목이면 아무것도 변경하지 않는다.
        """
        MenuService.validate_location(location)
        new_orders = {item["id"]: item["order"] for item in items}

        with transaction.atomic():
            menu = MenuService.get_or_create_menu(location)

            # select_for_update로 동시 수정 방지
            found = list(
                MenuItem.objects.select_for_update()
                .filter(pk__in=new_orders.keys())
                .order_by("id")
            )

            missing = sorted(set(new_orders) - {menu_item.id for menu_item in found})
            if missing:
                raise ResourceNotFoundException(
                    message="One or more menu items not found. Reorder failed.",
                    detail={"missing_ids": missing},
                )

            foreign = [menu_item.id for menu_item in found if menu_item.menu_id != menu.id]
            if foreign:
                raise ConflictException(
                    message=f"One or more menu items do not belong to the {location} menu. Reorder failed.",
                    detail={"foreign_ids": foreign},
                )

            now = timezone.now()
            for menu_item in found:
                menu_item.order = new_orders[menu_item.id]
                menu_item.updated_at = now
            MenuItem.objects.bulk_update(found, ["order", "updated_at"])

            _invalidate(location)

        logger.info(f"메뉴 순서 변경: location={location}, count={len(found)}")
        return len(found)

    @staticmethod
    @transaction.atomic
    def move_item(item_id, to_index):
        """
        같은 부모 안에서 항목을 to_index 위치로 이동

        형제 항목 전체의 order를 0..n-1로 다시 매긴다.
        """
        item = MenuService.get_item(item_id)
        rows = [
            {"id": sibling.id, "order": sibling.order}
            for sibling in MenuService.list_siblings(item).select_for_update()
        ]
        if to_index < 0 or to_index >= len(rows):
            raise ValidationException(
                message=f"to_index는 0 이상 {len(rows) - 1} 이하여야 합니다.",
                field="to_index",
            )

        from_index = next(index for index, row in enumerate(rows) if row["id"] == item.id)
        MenuService.reorder(item.location, move_in_list(rows, from_index, to_index))
        return MenuService.list_siblings(item)
