from rest_framework.permissions import BasePermission


# API 권한 체크용 Permission 클래스
class IsAdmin(BasePermission):
    """관리자(staff) 계정만 접근 가능"""
    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return bool(user.is_staff or user.is_superuser)
