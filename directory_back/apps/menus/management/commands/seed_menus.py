from django.core.management.base import BaseCommand
from django.db import transaction

from apps.menus.models import MenuItem, MenuLocation, MenuTarget
from apps.menus.services import MenuService
from apps.menus.cache import clear_all_menu_caches


DEFAULT_ITEMS = {
    MenuLocation.HEADER: [
        {'label': 'Home', 'url': '/'},
        {'label': 'Categories', 'url': '/categories', 'children': [
            {'label': 'Restaurants', 'url': '/categories/restaurants'},
            {'label': 'Shops', 'url': '/categories/shops'},
            {'label': 'Services', 'url': '/categories/services'},
        ]},
        {'label': 'Listings', 'url': '/listings'},
        {'label': 'About', 'url': '/about'},
        {'label': 'Contact', 'url': '/contact'},
    ],
    MenuLocation.FOOTER: [
        {'label': 'Privacy Policy', 'url': '/privacy'},
        {'label': 'Terms of Service', 'url': '/terms'},
        {'label': 'Add Your Business', 'url': '/account/listings/new'},
    ],
}


class Command(BaseCommand):
    help = 'Register header/footer menus (and default navigation items)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--with-defaults',
            action='store_true',
            help='Create default navigation items for empty menus',
        )

    def handle(self, *args, **options):
        self.stdout.write("=" * 60)
        self.stdout.write("Menu Registration")
        self.stdout.write("=" * 60)

        # Step 1: Create Menus
        self.stdout.write("\n[Step 1] Creating Menus...")
        menus = {}
        for location in MenuLocation.values:
            menus[location] = MenuService.get_or_create_menu(location)
            self.stdout.write(f"  {location}: {menus[location].name}")

        if not options['with_defaults']:
            self.stdout.write(self.style.SUCCESS("\nDone."))
            return

        # Step 2: Create default items (빈 메뉴에만)
        self.stdout.write("\n[Step 2] Creating Default Items...")
        for location, items in DEFAULT_ITEMS.items():
            menu = menus[location]
            if menu.items.exists():
                self.stdout.write(f"  {location}: Exists ({menu.items.count()} items) - skipped")
                continue

            with transaction.atomic():
                created = self._create_items(menu, items, parent=None)
            self.stdout.write(f"  {location}: Created {created} items")

        clear_all_menu_caches()
        self.stdout.write(self.style.SUCCESS("\nDone."))

    def _create_items(self, menu, items, parent):
        created = 0
        for order, data in enumerate(items):
            item = MenuItem.objects.create(
                menu=menu,
                parent=parent,
                label=data['label'],
                url=data['url'],
                order=order,
                target=data.get('target', MenuTarget.SELF),
            )
            created += 1
            created += self._create_items(menu, data.get('children', []), parent=item)
        return created
