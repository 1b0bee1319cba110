from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.core.management import call_command
from django.test import SimpleTestCase, TestCase
from io import StringIO
from unittest import mock
from rest_framework import status
from rest_framework.test import APITestCase, APIClient

from utils.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from .models import Menu, MenuItem, MenuTarget
from .services import MenuService
from .utils import (
    build_menu_tree,
    collect_descendant_ids,
    flatten_menu_tree,
    get_parent_options,
    move_item,
)


def _row(id, order, parent_id=None, label=None):
    return {"id": id, "order": order, "parent_id": parent_id, "label": label or f"item-{id}"}


def _labels(nodes):
    return [node["label"] for node in nodes]


class MenuTreeBuildTest(SimpleTestCase):
    """트리 구성 테스트"""

    def test_example_scenario(self):
        """Home, Products(Shoes) 예시"""
        tree = build_menu_tree([
            _row(3, 0, parent_id=2, label="Shoes"),
            _row(1, 0, label="Home"),
            _row(2, 1, label="Products"),
        ])

        self.assertEqual(_labels(tree), ["Home", "Products"])
        self.assertEqual(tree[0]["children"], [])
        self.assertEqual(_labels(tree[1]["children"]), ["Shoes"])

    def test_every_item_visited_once_and_sorted(self):
        """전위 순회 시 모든 항목 1회 방문 + 각 레벨 order 오름차순"""
        rows = [
            _row(1, 5), _row(2, 1), _row(3, 3, parent_id=1), _row(4, 0, parent_id=1),
            _row(5, 9, parent_id=4), _row(6, 2, parent_id=4), _row(7, 7, parent_id=2),
            _row(8, 4),
        ]
        tree = build_menu_tree(rows)

        visited = [item["id"] for item in flatten_menu_tree(tree)]
        self.assertEqual(sorted(visited), [row["id"] for row in rows])
        self.assertEqual(len(visited), len(set(visited)))

        def assert_sorted(nodes):
            orders = [node["order"] for node in nodes]
            self.assertEqual(orders, sorted(orders))
            for node in nodes:
                assert_sorted(node["children"])

        assert_sorted(tree)
        self.assertEqual([node["id"] for node in tree], [2, 8, 1])

    def test_children_appended_out_of_order_are_sorted(self):
        """부모보다 자식이 먼저 와도 정렬"""
        tree = build_menu_tree([
            _row(10, 2, parent_id=1), _row(11, 0, parent_id=1), _row(1, 0), _row(12, 1, parent_id=1),
        ])
        self.assertEqual([child["id"] for child in tree[0]["children"]], [11, 12, 10])

    def test_ties_broken_by_id(self):
        tree = build_menu_tree([_row(3, 0), _row(1, 0), _row(2, 0)])
        self.assertEqual([node["id"] for node in tree], [1, 2, 3])

    def test_dangling_parent_becomes_root(self):
        """없는 부모를 가리키는 항목은 최상위로"""
        tree = build_menu_tree([_row(1, 0), _row(2, 1, parent_id=999)])
        self.assertEqual([node["id"] for node in tree], [1, 2])

    def test_self_parent_becomes_root(self):
        tree = build_menu_tree([_row(1, 0, parent_id=1)])
        self.assertEqual([node["id"] for node in tree], [1])
        self.assertEqual(tree[0]["children"], [])

    def test_cycle_does_not_loop(self):
        """다중 노드 순환 데이터에서도 종료"""
        tree = build_menu_tree([_row(1, 0), _row(2, 0, parent_id=3), _row(3, 1, parent_id=2)])
        self.assertEqual([node["id"] for node in tree], [1])
        self.assertEqual(len(flatten_menu_tree(tree)), 1)

    def test_input_rows_not_mutated(self):
        rows = [_row(1, 0), _row(2, 0, parent_id=1)]
        build_menu_tree(rows)
        self.assertNotIn("children", rows[0])

    def test_empty_input(self):
        self.assertEqual(build_menu_tree([]), [])


class MenuParentOptionsTest(SimpleTestCase):
    """상위 메뉴 후보 테스트"""

    def setUp(self):
        # X(1) -> A(2) -> B(3), Y(4), Z(5) -> W(6)
        self.tree = build_menu_tree([
            _row(1, 0, label="X"),
            _row(2, 0, parent_id=1, label="A"),
            _row(3, 0, parent_id=2, label="B"),
            _row(4, 1, label="Y"),
            _row(5, 2, label="Z"),
            _row(6, 0, parent_id=5, label="W"),
        ])

    def test_excludes_item_and_descendants(self):
        options = get_parent_options(self.tree, 1)
        self.assertEqual(_labels(options), ["Y", "Z", "W"])

    def test_leaf_excludes_only_itself(self):
        options = get_parent_options(self.tree, 3)
        self.assertEqual(_labels(options), ["X", "A", "Y", "Z", "W"])

    def test_new_item_gets_all_options(self):
        options = get_parent_options(self.tree)
        self.assertEqual(_labels(options), ["X", "A", "B", "Y", "Z", "W"])
        self.assertEqual([option["depth"] for option in options], [0, 1, 2, 0, 0, 1])
        self.assertNotIn("children", options[0])

    def test_descendant_ids(self):
        self.assertEqual(collect_descendant_ids(self.tree, 1), {1, 2, 3})
        self.assertEqual(collect_descendant_ids(self.tree, 999), set())


class MenuMoveItemTest(SimpleTestCase):
    """드래그 앤 드롭 이동 테스트"""

    def setUp(self):
        self.items = [{"id": i, "order": i * 10} for i in range(1, 6)]

    def test_move_index_2_to_0(self):
        result = move_item(self.items, 2, 0)
        self.assertEqual([item["id"] for item in result], [3, 1, 2, 4, 5])
        self.assertEqual([item["order"] for item in result], [0, 1, 2, 3, 4])

    def test_move_down(self):
        result = move_item(self.items, 0, 4)
        self.assertEqual([item["id"] for item in result], [2, 3, 4, 5, 1])
        self.assertEqual(result[-1]["order"], 4)

    def test_original_not_mutated(self):
        move_item(self.items, 2, 0)
        self.assertEqual([item["order"] for item in self.items], [10, 20, 30, 40, 50])

    def test_out_of_range(self):
        with self.assertRaises(IndexError):
            move_item(self.items, 5, 0)
        with self.assertRaises(IndexError):
            move_item(self.items, 0, -1)


class MenuServiceTest(TestCase):
    """메뉴 서비스 테스트"""

    def setUp(self):
        cache.clear()
        self.home = MenuService.create_item("header", {"label": "Home", "url": "/"})
        self.products = MenuService.create_item("header", {"label": "Products", "url": "/products"})
        self.shoes = MenuService.create_item(
            "header", {"label": "Shoes", "url": "/products/shoes", "parent_id": self.products.id}
        )
        self.privacy = MenuService.create_item("footer", {"label": "Privacy", "url": "/privacy"})
        self.terms = MenuService.create_item("footer", {"label": "Terms", "url": "/terms"})

    def test_menu_created_lazily(self):
        self.assertEqual(Menu.objects.get(location="header").name, "Header Menu")
        self.assertEqual(Menu.objects.get(location="footer").name, "Footer Menu")

    def test_create_defaults(self):
        """order는 형제 마지막 다음, target은 _self, parent는 없음"""
        self.assertEqual(self.home.order, 0)
        self.assertEqual(self.products.order, 1)
        self.assertEqual(self.shoes.order, 0)
        self.assertEqual(self.home.target, MenuTarget.SELF)
        self.assertIsNone(self.home.parent_id)

    def test_create_blank_target_defaults_to_self(self):
        item = MenuService.create_item("header", {"label": "Blog", "url": "/blog", "target": ""})
        self.assertEqual(item.target, MenuTarget.SELF)

    def test_round_trip_through_tree(self):
        item = MenuService.create_item("header", {
            "label": "Partners",
            "url": "https://partners.example.com",
            "order": 7,
            "target": "_blank",
            "parent_id": self.products.id,
        })
        tree = MenuService.get_menu_tree("header")
        found = next(node for node in flatten_menu_tree(tree) if node["id"] == item.id)

        self.assertEqual(found["label"], "Partners")
        self.assertEqual(found["url"], "https://partners.example.com")
        self.assertEqual(found["order"], 7)
        self.assertEqual(found["target"], "_blank")
        self.assertEqual(found["parent_id"], self.products.id)
        self.assertEqual(found["location"], "header")

    def test_tree_is_partitioned_by_location(self):
        header = MenuService.get_menu_tree("header")
        footer = MenuService.get_menu_tree("footer")
        self.assertEqual(_labels(header), ["Home", "Products"])
        self.assertEqual(_labels(header[1]["children"]), ["Shoes"])
        self.assertEqual(_labels(footer), ["Privacy", "Terms"])

    def test_invalid_location(self):
        with self.assertRaises(ValidationException) as ctx:
            MenuService.get_menu_tree("sidebar")
        self.assertEqual(ctx.exception.field, "location")

    def test_parent_from_other_location_rejected(self):
        with self.assertRaises(ValidationException) as ctx:
            MenuService.create_item("header", {"label": "X", "url": "/x", "parent_id": self.privacy.id})
        self.assertEqual(ctx.exception.field, "parent_id")

    def test_missing_parent_rejected(self):
        with self.assertRaises(ValidationException):
            MenuService.create_item("header", {"label": "X", "url": "/x", "parent_id": 9999})

    def test_update_partial_keeps_other_fields(self):
        item = MenuService.update_item(self.home.id, {"label": "Start"})
        self.assertEqual(item.label, "Start")
        self.assertEqual(item.url, "/")
        self.assertEqual(item.order, 0)

    def test_update_parent_to_descendant_rejected(self):
        with self.assertRaises(ValidationException):
            MenuService.update_item(self.products.id, {"parent_id": self.shoes.id})
        with self.assertRaises(ValidationException):
            MenuService.update_item(self.products.id, {"parent_id": self.products.id})

    def test_update_explicit_null_parent_moves_to_root(self):
        item = MenuService.update_item(self.shoes.id, {"parent_id": None})
        self.assertIsNone(item.parent_id)
        # 새 부모(최상위)의 마지막으로
        self.assertEqual(item.order, 2)

    def test_update_not_found(self):
        with self.assertRaises(ResourceNotFoundException):
            MenuService.update_item(9999, {"label": "X"})

    def test_label_update_keeps_concurrent_reorder(self):
        """라벨만 수정하면 사이에 커밋된 순서 변경이 유지됨"""
        lock_item = MenuService._lock_item

        def read_then_reorder(item_id):
            item = lock_item(item_id)
            MenuService.reorder("header", [
                {"id": self.home.id, "order": 1},
                {"id": self.products.id, "order": 0},
            ])
            return item

        with mock.patch.object(MenuService, "_lock_item", side_effect=read_then_reorder):
            MenuService.update_item(self.home.id, {"label": "Start"})

        orders = dict(
            MenuItem.objects
            .filter(menu__location="header", parent__isnull=True)
            .values_list("label", "order")
        )
        self.assertEqual(orders, {"Start": 1, "Products": 0})

    def test_crossing_reparents_cannot_form_cycle(self):
        """이전에 읽은 트리 기준으로 서로를 부모로 지정해도 순환이 생기지 않음"""
        stale_tree = MenuService.get_menu_tree("header")

        with mock.patch.object(MenuService, "get_menu_tree", return_value=stale_tree):
            MenuService.update_item(self.home.id, {"parent_id": self.products.id})
            with self.assertRaises(ValidationException):
                MenuService.update_item(self.products.id, {"parent_id": self.home.id})

        tree = MenuService.get_menu_tree("header")
        self.assertEqual(_labels(tree), ["Products"])
        self.assertEqual(sorted(_labels(tree[0]["children"])), ["Home", "Shoes"])
        self.products.refresh_from_db()
        self.assertIsNone(self.products.parent_id)

    def test_delete_cascades_children(self):
        deleted = MenuService.delete_item(self.products.id)
        self.assertEqual(deleted, 2)
        self.assertFalse(MenuItem.objects.filter(pk=self.shoes.id).exists())
        self.assertTrue(MenuItem.objects.filter(pk=self.home.id).exists())

    def test_delete_not_found(self):
        with self.assertRaises(ResourceNotFoundException):
            MenuService.delete_item(9999)

    def test_reorder(self):
        count = MenuService.reorder("header", [
            {"id": self.home.id, "order": 1},
            {"id": self.products.id, "order": 0},
        ])
        self.assertEqual(count, 2)
        self.assertEqual(_labels(MenuService.get_menu_tree("header")), ["Products", "Home"])

    def test_reorder_missing_id_changes_nothing(self):
        """하나라도 없는 id가 있으면 전체 취소"""
        with self.assertRaises(ResourceNotFoundException):
            MenuService.reorder("header", [
                {"id": self.home.id, "order": 5},
                {"id": self.products.id, "order": 6},
                {"id": 9999, "order": 7},
            ])

        self.home.refresh_from_db()
        self.products.refresh_from_db()
        self.assertEqual(self.home.order, 0)
        self.assertEqual(self.products.order, 1)

    def test_reorder_foreign_location_changes_nothing(self):
        with self.assertRaises(ConflictException):
            MenuService.reorder("header", [
                {"id": self.home.id, "order": 5},
                {"id": self.privacy.id, "order": 6},
            ])

        self.home.refresh_from_db()
        self.privacy.refresh_from_db()
        self.assertEqual(self.home.order, 0)
        self.assertEqual(self.privacy.order, 0)

    def test_reorder_header_leaves_footer_untouched(self):
        before = dict(MenuItem.objects.filter(menu__location="footer").values_list("id", "order"))
        MenuService.reorder("header", [
            {"id": self.home.id, "order": 3},
            {"id": self.products.id, "order": 2},
            {"id": self.shoes.id, "order": 1},
        ])
        after = dict(MenuItem.objects.filter(menu__location="footer").values_list("id", "order"))
        self.assertEqual(before, after)

    def test_move_item_renormalizes_siblings(self):
        extra = [
            MenuService.create_item("header", {"label": label, "url": f"/{label.lower()}"})
            for label in ("About", "Contact", "Blog")
        ]
        # 최상위: Home(0) Products(1) About(2) Contact(3) Blog(4)
        siblings = list(MenuService.move_item(extra[0].id, 0))

        self.assertEqual(
            [item.label for item in siblings],
            ["About", "Home", "Products", "Contact", "Blog"],
        )
        self.assertEqual([item.order for item in siblings], [0, 1, 2, 3, 4])
        self.shoes.refresh_from_db()
        self.assertEqual(self.shoes.order, 0)

    def test_move_item_out_of_range(self):
        with self.assertRaises(ValidationException):
            MenuService.move_item(self.home.id, 5)

    def test_move_item_negative_index(self):
        with self.assertRaises(ValidationException) as ctx:
            MenuService.move_item(self.home.id, -1)
        self.assertEqual(ctx.exception.field, "to_index")
        self.home.refresh_from_db()
        self.assertEqual(self.home.order, 0)

    def test_parent_options(self):
        options = MenuService.get_parent_options("header", self.products.id)
        self.assertEqual(_labels(options), ["Home"])

    def test_create_menu_duplicate_location(self):
        with self.assertRaises(ConflictException):
            MenuService.create_menu("Another Header", "header")


class MenuCacheTest(TestCase):
    """공개 메뉴 캐시 테스트"""

    def setUp(self):
        cache.clear()
        self.client = APIClient()
        MenuService.create_item("header", {"label": "Home", "url": "/"})

    def tearDown(self):
        cache.clear()

    def test_public_menu_served_from_cache(self):
        response = self.client.get("/api/public/menus/header/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(_labels(response.data), ["Home"])

        # 서비스를 거치지 않은 변경은 캐시 만료 전까지 보이지 않음
        menu = Menu.objects.get(location="header")
        MenuItem.objects.create(menu=menu, label="Hidden", url="/hidden", order=9)
        response = self.client.get("/api/public/menus/header/")
        self.assertEqual(_labels(response.data), ["Home"])

    def test_write_clears_cache(self):
        self.client.get("/api/public/menus/header/")

        with self.captureOnCommitCallbacks(execute=True):
            MenuService.create_item("header", {"label": "About", "url": "/about"})

        response = self.client.get("/api/public/menus/header/")
        self.assertEqual(_labels(response.data), ["Home", "About"])

    def test_admin_tree_is_not_cached(self):
        MenuService.get_public_menu_tree("header")
        menu = Menu.objects.get(location="header")
        MenuItem.objects.create(menu=menu, label="Fresh", url="/fresh", order=9)

        self.assertEqual(_labels(MenuService.get_menu_tree("header")), ["Home", "Fresh"])

    def test_public_invalid_location(self):
        response = self.client.get("/api/public/menus/sidebar/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["field"], "location")


class MenuAPITest(APITestCase):
    """메뉴 API 테스트"""

    def setUp(self):
        cache.clear()
        User = get_user_model()
        self.admin = User.objects.create_user(
            username="admin1", password="testpass123", email="admin@test.com", is_staff=True
        )
        self.member = User.objects.create_user(
            username="member1", password="testpass123", email="member@test.com"
        )
        self.client = APIClient()

    def _create(self, location, **data):
        response = self.client.post(f"/api/menus/{location}/items/", data, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response.data

    def test_unauthenticated(self):
        """비인증 사용자 접근 실패"""
        response = self.client.get("/api/menus/header/items/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"]["code"], "ERR_001")

    def test_non_admin_forbidden(self):
        """관리자가 아닌 사용자 접근 실패"""
        self.client.force_authenticate(user=self.member)
        response = self.client.get("/api/menus/header/items/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_create_and_list(self):
        self.client.force_authenticate(user=self.admin)
        home = self._create("header", label="Home", url="/")
        self.assertEqual(home["order"], 0)
        self.assertEqual(home["target"], "_self")
        self.assertIsNone(home["parent_id"])
        self.assertEqual(home["location"], "header")

        response = self.client.get("/api/menus/header/items/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["id"] for item in response.data], [home["id"]])

        response = self.client.get("/api/menus/footer/items/")
        self.assertEqual(response.data, [])

    def test_list_filter(self):
        self.client.force_authenticate(user=self.admin)
        parent = self._create("header", label="Products", url="/products")
        self._create("header", label="Shoes", url="/products/shoes", parent_id=parent["id"])

        response = self.client.get("/api/menus/header/items/", {"is_root": "true"})
        self.assertEqual([item["label"] for item in response.data], ["Products"])

        response = self.client.get("/api/menus/header/items/", {"parent_id": parent["id"]})
        self.assertEqual([item["label"] for item in response.data], ["Shoes"])

        response = self.client.get("/api/menus/header/items/", {"label": "sho"})
        self.assertEqual([item["label"] for item in response.data], ["Shoes"])

    def test_create_missing_label(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post("/api/menus/header/items/", {"url": "/"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "ERR_101")
        self.assertEqual(response.data["error"]["field"], "label")
        self.assertFalse(MenuItem.objects.exists())

    def test_create_invalid_url(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            "/api/menus/header/items/", {"label": "Bad", "url": "not a url"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["field"], "url")

    def test_create_invalid_location(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(
            "/api/menus/sidebar/items/", {"label": "Home", "url": "/"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["field"], "location")
        self.assertFalse(Menu.objects.exists())

    def test_update_item(self):
        self.client.force_authenticate(user=self.admin)
        home = self._create("header", label="Home", url="/")

        response = self.client.patch(
            f"/api/menus/items/{home['id']}/", {"target": "_blank"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["target"], "_blank")
        self.assertEqual(response.data["label"], "Home")

        response = self.client.put(
            f"/api/menus/items/{home['id']}/", {"label": "Start"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["label"], "Start")

    def test_update_empty_payload(self):
        self.client.force_authenticate(user=self.admin)
        home = self._create("header", label="Home", url="/")
        response = self.client.patch(f"/api/menus/items/{home['id']}/", {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_not_found(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch("/api/menus/items/9999/", {"label": "X"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"]["code"], "ERR_201")

    def test_update_cycle_rejected(self):
        self.client.force_authenticate(user=self.admin)
        parent = self._create("header", label="Products", url="/products")
        child = self._create("header", label="Shoes", url="/products/shoes", parent_id=parent["id"])

        response = self.client.patch(
            f"/api/menus/items/{parent['id']}/", {"parent_id": child["id"]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["field"], "parent_id")

    def test_delete_item(self):
        self.client.force_authenticate(user=self.admin)
        home = self._create("header", label="Home", url="/")
        response = self.client.delete(f"/api/menus/items/{home['id']}/")
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        response = self.client.delete(f"/api/menus/items/{home['id']}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_tree_endpoint(self):
        self.client.force_authenticate(user=self.admin)
        self._create("header", label="Home", url="/")
        products = self._create("header", label="Products", url="/products")
        self._create("header", label="Shoes", url="/products/shoes", parent_id=products["id"])

        response = self.client.get("/api/menus/header/tree/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(_labels(response.data), ["Home", "Products"])
        self.assertEqual(_labels(response.data[1]["children"]), ["Shoes"])

    def test_parent_options_endpoint(self):
        self.client.force_authenticate(user=self.admin)
        home = self._create("header", label="Home", url="/")
        products = self._create("header", label="Products", url="/products")
        self._create("header", label="Shoes", url="/products/shoes", parent_id=products["id"])

        response = self.client.get(
            "/api/menus/header/parent-options/", {"exclude": products["id"]}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([option["id"] for option in response.data], [home["id"]])

        response = self.client.get("/api/menus/header/parent-options/")
        self.assertEqual(len(response.data), 3)

        response = self.client.get("/api/menus/header/parent-options/", {"exclude": "abc"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_reorder(self):
        self.client.force_authenticate(user=self.admin)
        home = self._create("header", label="Home", url="/")
        about = self._create("header", label="About", url="/about")

        response = self.client.post("/api/menus/reorder/", {
            "location": "header",
            "items": [{"id": home["id"], "order": 1}, {"id": about["id"], "order": 0}],
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["updated"], 2)

        response = self.client.get("/api/menus/header/items/")
        self.assertEqual([item["label"] for item in response.data], ["About", "Home"])

    def test_reorder_missing_item(self):
        """없는 항목 포함 시 404, 변경 없음"""
        self.client.force_authenticate(user=self.admin)
        home = self._create("header", label="Home", url="/")

        response = self.client.post("/api/menus/reorder/", {
            "location": "header",
            "items": [{"id": home["id"], "order": 4}, {"id": 9999, "order": 0}],
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(MenuItem.objects.get(pk=home["id"]).order, 0)

    def test_reorder_other_location(self):
        self.client.force_authenticate(user=self.admin)
        home = self._create("header", label="Home", url="/")
        privacy = self._create("footer", label="Privacy", url="/privacy")

        response = self.client.post("/api/menus/reorder/", {
            "location": "header",
            "items": [{"id": home["id"], "order": 1}, {"id": privacy["id"], "order": 0}],
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(MenuItem.objects.get(pk=home["id"]).order, 0)
        self.assertEqual(MenuItem.objects.get(pk=privacy["id"]).order, 0)

    def test_reorder_invalid_payload(self):
        self.client.force_authenticate(user=self.admin)
        home = self._create("header", label="Home", url="/")

        for payload in (
            {"location": "sidebar", "items": [{"id": home["id"], "order": 0}]},
            {"location": "header", "items": []},
            {"location": "header", "items": [{"id": home["id"]}]},
            {"location": "header", "items": [{"id": home["id"], "order": 0}, {"id": home["id"], "order": 1}]},
        ):
            response = self.client.post("/api/menus/reorder/", payload, format="json")
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, payload)

    def test_move_endpoint(self):
        self.client.force_authenticate(user=self.admin)
        items = [self._create("header", label=label, url=f"/{label.lower()}") for label in ("A", "B", "C")]

        response = self.client.post(
            f"/api/menus/items/{items[2]['id']}/move/", {"to_index": 0}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item["label"] for item in response.data], ["C", "A", "B"])
        self.assertEqual([item["order"] for item in response.data], [0, 1, 2])

    def test_menus_list_and_create(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post("/api/menus/", {"name": "Main", "location": "header"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["location"], "header")

        response = self.client.post("/api/menus/", {"name": "Again", "location": "header"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"]["code"], "ERR_301")

        response = self.client.get("/api/menus/")
        self.assertEqual([menu["name"] for menu in response.data], ["Main"])


class SeedMenusCommandTest(TestCase):
    """seed_menus 명령 테스트"""

    def test_seed_is_idempotent(self):
        call_command("seed_menus", "--with-defaults", stdout=StringIO())
        header_count = MenuItem.objects.filter(menu__location="header").count()
        self.assertGreater(header_count, 0)

        call_command("seed_menus", "--with-defaults", stdout=StringIO())
        self.assertEqual(MenuItem.objects.filter(menu__location="header").count(), header_count)

    def test_seed_tree_shape(self):
        call_command("seed_menus", "--with-defaults", stdout=StringIO())
        tree = MenuService.get_menu_tree("header")
        self.assertEqual(tree[0]["label"], "Home")
        categories = next(node for node in tree if node["label"] == "Categories")
        self.assertEqual(len(categories["children"]), 3)

    def test_seed_without_defaults(self):
        call_command("seed_menus", stdout=StringIO())
        self.assertEqual(Menu.objects.count(), 2)
        self.assertFalse(MenuItem.objects.exists())
