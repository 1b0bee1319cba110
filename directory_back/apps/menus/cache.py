import copy
import logging

from django.conf import settings
from django.core.cache import cache

from .models import MenuLocation

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "menus:tree"


def menu_cache_key(location):
    return f"{CACHE_KEY_PREFIX}:{location}"


def get_cached_menu_tree(location, loader):
    """
    공개 메뉴 트리 조회 (캐시 우선)

    캐시에 없으면 loader(location)로 만들어 저장한다.
    반환값은 깊은 복사본이라 호출자가 수정해도 캐시에 영향이 없다.
    """
    key = menu_cache_key(location)
    tree = cache.get(key)
    if tree is None:
        logger.debug(f"[Cache MISS] menu location={location}")
        tree = loader(location)
        cache.set(key, tree, getattr(settings, "MENU_CACHE_TIMEOUT", 300))
    else:
        logger.debug(f"[Cache HIT] menu location={location}")
    return copy.deepcopy(tree)


def clear_menu_cache(location):
    """특정 위치의 메뉴 캐시 삭제"""
    cache.delete(menu_cache_key(location))
    logger.info(f"[Cache CLEARED] menu location={location}")


def clear_all_menu_caches():
    """모든 위치의 메뉴 캐시 삭제"""
    cache.delete_many([menu_cache_key(location) for location in MenuLocation.values])
    logger.info("[Cache CLEARED] all menu locations")
