from django.urls import path
from .views import (
    MenuListView,
    MenuItemListView,
    MenuItemDetailView,
    MenuItemMoveView,
    MenuTreeView,
    MenuParentOptionsView,
    MenuReorderView,
)

app_name = 'menus'

# 메뉴 관리 API 엔드포인트 정의 (고정 경로를 <location>보다 먼저)
urlpatterns = [
    path('', MenuListView.as_view(), name='menu-list'),
    path('reorder/', MenuReorderView.as_view(), name='menu-reorder'),
    path('items/<int:pk>/', MenuItemDetailView.as_view(), name='menu-item-detail'),
    path('items/<int:pk>/move/', MenuItemMoveView.as_view(), name='menu-item-move'),
    path('<str:location>/items/', MenuItemListView.as_view(), name='menu-item-list'),
    path('<str:location>/tree/', MenuTreeView.as_view(), name='menu-tree'),
    path('<str:location>/parent-options/', MenuParentOptionsView.as_view(), name='menu-parent-options'),
]

# =============================================================================
# 생성된 URL 패턴:
# =============================================================================
# GET    /api/menus/                                 - 메뉴(위치) 목록
# POST   /api/menus/                                 - 메뉴 생성
# POST   /api/menus/reorder/                         - 순서 일괄 변경 {location, items}
# GET    /api/menus/items/{id}/                      - 항목 상세
# PATCH  /api/menus/items/{id}/                      - 항목 수정
# DELETE /api/menus/items/{id}/                      - 항목 삭제 (하위 포함)
# POST   /api/menus/items/{id}/move/                 - 형제 안에서 위치 이동 {to_index}
# GET    /api/menus/{location}/items/                - 위치별 평면 목록
# POST   /api/menus/{location}/items/                - 항목 생성
# GET    /api/menus/{location}/tree/                 - 위치별 트리
# GET    /api/menus/{location}/parent-options/       - 상위 메뉴 후보 (?exclude=id)
#
# 공개
# GET    /api/public/menus/{location}/               - 캐시된 트리 (config/urls.py)
