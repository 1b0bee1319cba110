from django.db import models

# Menu 모델 설계 (위치별 메뉴 + 메뉴 항목 parent-child 구조)


class MenuLocation(models.TextChoices):
    HEADER = "header", "Header"
    FOOTER = "footer", "Footer"


class MenuTarget(models.TextChoices):
    SELF = "_self", "같은 창"
    BLANK = "_blank", "새 창"


# 위치별 메뉴 (header / footer 각 1개)
class Menu(models.Model):
    id = models.BigAutoField(primary_key=True)
    name = models.CharField(max_length=100)
    location = models.CharField(max_length=20, choices=MenuLocation.choices, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "menu"
        ordering = ["name"]
        verbose_name = "메뉴"
        verbose_name_plural = "메뉴"

    def __str__(self):
        return f"{self.name} ({self.location})"

    @staticmethod
    def default_name(location):
        # 'header' -> 'Header Menu'
        return f"{location[:1].upper()}{location[1:]} Menu"


# 메뉴 항목 (parent가 NULL이면 최상위)
class MenuItem(models.Model):
    id = models.BigAutoField(primary_key=True)
    menu = models.ForeignKey(Menu, related_name="items", on_delete=models.CASCADE)
    label = models.CharField(max_length=255)
    url = models.CharField(max_length=500)
    # 같은 parent 안에서의 순서 (연속일 필요 없음, 동률은 id 순)
    order = models.IntegerField(default=0)
    target = models.CharField(max_length=10, choices=MenuTarget.choices, default=MenuTarget.SELF)
    parent = models.ForeignKey(
        "self",
        related_name="children",
        on_delete=models.CASCADE,
        blank=True,
        null=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "menu_item"
        ordering = ["order", "id"]
        indexes = [
            models.Index(fields=["menu", "parent", "order"], name="menu_item_menu_parent_idx"),
        ]
        verbose_name = "메뉴 항목"
        verbose_name_plural = "메뉴 항목"

    def __str__(self):
        return self.label

    @property
    def location(self):
        return self.menu.location
