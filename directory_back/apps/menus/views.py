import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.common.permission import IsAdmin
from utils.exceptions import ValidationException
from .filters import MenuItemFilter
from .serializers import (
    MenuSerializer,
    MenuCreateSerializer,
    MenuItemSerializer,
    MenuItemCreateSerializer,
    MenuItemUpdateSerializer,
    ReorderSerializer,
    MoveItemSerializer,
)
from .services import MenuService

logger = logging.getLogger(__name__)


# =============================================================================
# 메뉴(위치) API
# =============================================================================
class MenuListView(APIView):
    """
    메뉴 목록 조회 / 생성

    GET: 전체 메뉴(위치) 목록
    POST: 메뉴 생성 (이미 있는 위치면 409)
    """
    permission_classes = [IsAdmin]

    @extend_schema(tags=["Menus"], summary="메뉴 목록 조회", responses=MenuSerializer(many=True))
    def get(self, request):
        menus = MenuService.list_menus()
        return Response(MenuSerializer(menus, many=True).data)

    @extend_schema(
        tags=["Menus"],
        summary="메뉴 생성",
        request=MenuCreateSerializer,
        responses={
            201: MenuSerializer,
            409: OpenApiResponse(description="이미 존재하는 위치"),
        },
    )
    def post(self, request):
        serializer = MenuCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        menu = MenuService.create_menu(**serializer.validated_data)
        return Response(MenuSerializer(menu).data, status=status.HTTP_201_CREATED)


# =============================================================================
# 메뉴 항목 API
# =============================================================================
class MenuItemListView(APIView):
    """
    위치별 메뉴 항목 목록 / 생성

    GET: 평면 목록 (드래그 앤 드롭 정렬 UI용)
    POST: 항목 생성
    """
    permission_classes = [IsAdmin]

    @extend_schema(
        tags=["Menu Items"],
        summary="위치별 메뉴 항목 목록",
        parameters=[
            OpenApiParameter(name="label", description="라벨 검색", type=str),
            OpenApiParameter(name="url", description="URL 검색", type=str),
            OpenApiParameter(name="target", description="열기 방식 (_self, _blank)", type=str),
            OpenApiParameter(name="parent_id", description="부모 항목 ID", type=int),
            OpenApiParameter(name="is_root", description="최상위 항목만", type=bool),
        ],
        responses=MenuItemSerializer(many=True),
    )
    def get(self, request, location):
        items = MenuService.list_items(location)

        filterset = MenuItemFilter(request.query_params, queryset=items)
        if not filterset.is_valid():
            raise ValidationError(filterset.errors)

        return Response(MenuItemSerializer(filterset.qs, many=True).data)

    @extend_schema(
        tags=["Menu Items"],
        summary="메뉴 항목 생성",
        request=MenuItemCreateSerializer,
        responses={201: MenuItemSerializer},
    )
    def post(self, request, location):
        MenuService.validate_location(location)
        serializer = MenuItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = MenuService.create_item(location, serializer.validated_data)
        return Response(MenuItemSerializer(item).data, status=status.HTTP_201_CREATED)


class MenuItemDetailView(APIView):
    """
    메뉴 항목 상세 / 수정 / 삭제

    PUT, PATCH 모두 부분 수정으로 처리한다.
    """
    permission_classes = [IsAdmin]

    @extend_schema(tags=["Menu Items"], summary="메뉴 항목 상세", responses=MenuItemSerializer)
    def get(self, request, pk):
        item = MenuService.get_item(pk)
        return Response(MenuItemSerializer(item).data)

    @extend_schema(
        tags=["Menu Items"],
        summary="메뉴 항목 수정",
        request=MenuItemUpdateSerializer,
        responses=MenuItemSerializer,
    )
    def patch(self, request, pk):
        serializer = MenuItemUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = MenuService.update_item(pk, serializer.validated_data)
        return Response(MenuItemSerializer(item).data)

    @extend_schema(
        tags=["Menu Items"],
        summary="메뉴 항목 수정 (PATCH와 동일)",
        request=MenuItemUpdateSerializer,
        responses=MenuItemSerializer,
    )
    def put(self, request, pk):
        return self.patch(request, pk)

    @extend_schema(
        tags=["Menu Items"],
        summary="메뉴 항목 삭제 (하위 항목 포함)",
        responses={204: None},
    )
    def delete(self, request, pk):
        MenuService.delete_item(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MenuItemMoveView(APIView):
    """같은 부모 안에서 위치 이동 후 형제 목록 반환"""
    permission_classes = [IsAdmin]

    @extend_schema(
        tags=["Menu Items"],
        summary="메뉴 항목 위치 이동",
        request=MoveItemSerializer,
        responses=MenuItemSerializer(many=True),
    )
    def post(self, request, pk):
        serializer = MoveItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        siblings = MenuService.move_item(pk, serializer.validated_data["to_index"])
        return Response(MenuItemSerializer(siblings, many=True).data)


class MenuTreeView(APIView):
    """위치별 트리 (관리자 미리보기, 캐시 사용 안 함)"""
    permission_classes = [IsAdmin]

    @extend_schema(tags=["Menu Items"], summary="위치별 메뉴 트리")
    def get(self, request, location):
        return Response(MenuService.get_menu_tree(location))


class MenuParentOptionsView(APIView):
    """상위 메뉴 선택 후보 (exclude 항목과 그 하위 항목 제외)"""
    permission_classes = [IsAdmin]

    @extend_schema(
        tags=["Menu Items"],
        summary="상위 메뉴 후보 목록",
        parameters=[
            OpenApiParameter(name="exclude", description="수정 중인 항목 ID", type=int),
        ],
    )
    def get(self, request, location):
        exclude = request.query_params.get("exclude")
        current_item_id = None
        if exclude:
            try:
                current_item_id = int(exclude)
            except ValueError:
                raise ValidationException(message="exclude는 숫자여야 합니다.", field="exclude")

        options = MenuService.get_parent_options(location, current_item_id)
        return Response(options)


class MenuReorderView(APIView):
    """드래그 앤 드롭 순서 일괄 저장"""
    permission_classes = [IsAdmin]

    @extend_schema(
        tags=["Menu Items"],
        summary="메뉴 순서 일괄 변경",
        request=ReorderSerializer,
        responses={
            200: OpenApiResponse(description="변경 완료"),
            404: OpenApiResponse(description="존재하지 않는 항목 포함 (변경 없음)"),
            409: OpenApiResponse(description="다른 위치의 항목 포함 (변경 없음)"),
        },
    )
    def post(self, request):
        serializer = ReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        location = serializer.validated_data["location"]

        count = MenuService.reorder(location, serializer.validated_data["items"])
        return Response({
            "message": f"{location} menu reordered successfully.",
            "updated": count,
        })


# =============================================================================
# 공개 API
# =============================================================================
class PublicMenuTreeView(APIView):
    """공개 페이지 헤더/푸터 메뉴 (인증 불필요, 캐시)"""
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(tags=["Public"], summary="공개 메뉴 트리")
    def get(self, request, location):
        return Response(MenuService.get_public_menu_tree(location))
