def _sort_key(node):
    # order 오름차순, 동률이면 id 순
    return (node.get("order") or 0, node["id"])


def build_menu_tree(items):
    """
    평면 메뉴 항목 목록을 children 트리로 변환

    - parent_id가 없거나, 목록에 없는 id를 가리키거나, 자기 자신이면 최상위로 둔다
    - 각 항목은 한 번만 처리하므로 데이터에 순환이 있어도 무한 루프가 없다
    """
    menu_map = {}
    tree = []

    # 모든 메뉴 노드 생성
    for item in items:
        node = dict(item)
        node["children"] = []
        menu_map[node["id"]] = node

    # 메뉴 : 부모-자식 관계 연결
    for node in menu_map.values():
        parent_id = node.get("parent_id")
        parent = menu_map.get(parent_id) if parent_id is not None else None

        if parent is not None and parent_id != node["id"]:
            parent["children"].append(node)
        else:
            tree.append(node)

    # 모든 레벨 정렬 (노드 단위로 한 번씩)
    for node in menu_map.values():
        node["children"].sort(key=_sort_key)
    tree.sort(key=_sort_key)

    return tree


def flatten_menu_tree(tree):
    """트리를 전위 순회 순서의 평면 목록으로 (depth 포함, children 제외)"""
    flat = []
    visited = set()

    def walk(nodes, depth):
        for node in nodes:
            if node["id"] in visited:
                continue
            visited.add(node["id"])
            entry = {key: value for key, value in node.items() if key != "children"}
            entry["depth"] = depth
            flat.append(entry)
            walk(node.get("children") or [], depth + 1)

    walk(tree, 0)
    return flat


def _find_node(nodes, item_id):
    stack = list(nodes)
    visited = set()
    while stack:
        node = stack.pop()
        if node["id"] == item_id:
            return node
        if node["id"] in visited:
            continue
        visited.add(node["id"])
        stack.extend(node.get("children") or [])
    return None


def collect_descendant_ids(tree, item_id):
    """item_id 자신 + 모든 하위 항목 id 집합 (트리에 없으면 빈 집합)"""
    start = _find_node(tree, item_id)
    if start is None:
        return set()

    descendant_ids = set()

    def add_children(node):
        if node["id"] in descendant_ids:
            return
        descendant_ids.add(node["id"])
        for child in node.get("children") or []:
            add_children(child)  # 재귀적으로 자식의 자식도 포함

    add_children(start)
    return descendant_ids


def get_parent_options(tree, current_item_id=None):
    """
    상위 메뉴 선택 후보 목록

    수정 중인 항목 자신과 그 하위 항목을 부모로 고르면 순환이 생기므로 제외한다.
    새 항목 생성 시(current_item_id 없음)에는 전체가 후보.
    """
    flat = flatten_menu_tree(tree)
    if current_item_id is None:
        return flat

    excluded = collect_descendant_ids(tree, current_item_id)
    return [item for item in flat if item["id"] not in excluded]


def move_item(items, from_index, to_index):
    """
    목록 안에서 항목 하나를 이동하고 order를 0..n-1로 재지정

    드래그 앤 드롭 결과를 그대로 반영한다. 원본 목록/항목은 변경하지 않는다.
    """
    size = len(items)
    if not 0 <= from_index < size:
        raise IndexError(f"from_index {from_index} out of range for {size} items")
    if not 0 <= to_index < size:
        raise IndexError(f"to_index {to_index} out of range for {size} items")

    result = list(items)
    removed = result.pop(from_index)
    result.insert(to_index, removed)
    return [{**item, "order": index} for index, item in enumerate(result)]
