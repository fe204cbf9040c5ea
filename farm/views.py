import logging

from django.conf import settings
from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import render, redirect
from django.utils import timezone
from django.views.decorators.http import require_GET, require_http_methods

from . import metrics
from .exceptions import RecordNotFound
from .records import (
    CROPS_KEY,
    INVENTORY_KEY,
    category_label,
    health_label,
    is_low_stock,
    status_label,
)
from .screens import CropScreen, InventoryScreen
from .seed_data import default_monitoring
from .store import store_for_request

logger = logging.getLogger(__name__)

REQUIRED_MESSAGE = 'Por favor complete los campos requeridos'
INVALID_MESSAGE = 'Revise los campos marcados'


def _window_days():
    return getattr(settings, 'FARM_UPCOMING_HARVEST_DAYS', 30)


def _sync_context(store):
    return {
        'sync_poll_seconds': getattr(settings, 'FARM_SYNC_POLL_SECONDS', 5),
        'sync_revisions': {
            CROPS_KEY: store.revision(CROPS_KEY),
            INVENTORY_KEY: store.revision(INVENTORY_KEY),
        },
    }


def _crop_rows(crops):
    return [
        dict(crop,
             status_label=status_label(crop.get('status')),
             health_label=health_label(crop.get('healthStatus')))
        for crop in crops
    ]


def _inventory_rows(items):
    return [
        dict(item,
             category_label=category_label(item.get('category')),
             low_stock=is_low_stock(item))
        for item in items
    ]


@require_GET
def dashboard(request):
    """Headline figures, crop status distribution and the latest crops."""
    store = store_for_request(request)
    crops = store.load(CROPS_KEY)
    inventory = store.load(INVENTORY_KEY)
    readings = default_monitoring()

    low_stock = metrics.low_stock_count(inventory)
    context = {
        'active_crops': metrics.active_crops(crops),
        'crop_count': len(crops),
        'total_area': metrics.total_area(crops),
        'estimated_yield': metrics.format_quantity(metrics.estimated_yield(crops)),
        'low_stock': low_stock,
        'status_breakdown': metrics.status_breakdown(crops),
        'readings': readings,
        'recent_crops': _crop_rows(crops[:3]),
        'nav': 'dashboard',
    }
    context.update(_sync_context(store))
    logger.info('Dashboard: crops=%d, inventory=%d, low_stock=%d', len(crops), len(inventory), low_stock)
    return render(request, 'farm/dashboard.html', context)


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------

@require_GET
def inventory_list(request):
    store = store_for_request(request)
    screen = InventoryScreen(store)
    items = screen.search(request.GET.get('q', ''))
    context = {
        'items': _inventory_rows(items),
        'search_term': screen.search_term,
        'total': len(screen.collection),
        'nav': 'inventory',
    }
    context.update(_sync_context(store))
    return render(request, 'farm/inventory.html', context)


@require_http_methods(['GET', 'POST'])
def inventory_create(request):
    screen = InventoryScreen(store_for_request(request))
    screen.open_create()
    return _handle_form(request, screen, 'inventory_list', 'farm/inventory_form.html')


@require_http_methods(['GET', 'POST'])
def inventory_edit(request, item_id):
    screen = InventoryScreen(store_for_request(request))
    try:
        screen.open_edit(item_id)
    except RecordNotFound as e:
        return _not_found(request, e, 'farm/inventory_form.html', 'inventory')
    return _handle_form(request, screen, 'inventory_list', 'farm/inventory_form.html')


# ---------------------------------------------------------------------------
# Crops
# ---------------------------------------------------------------------------

@require_GET
def crop_list(request):
    store = store_for_request(request)
    screen = CropScreen(store)
    context = {
        'crops': _crop_rows(screen.collection),
        'nav': 'crops',
    }
    context.update(_sync_context(store))
    return render(request, 'farm/crops.html', context)


@require_http_methods(['GET', 'POST'])
def crop_create(request):
    screen = CropScreen(store_for_request(request))
    screen.open_create()
    return _handle_form(request, screen, 'crop_list', 'farm/crop_form.html')


@require_http_methods(['GET', 'POST'])
def crop_edit(request, crop_id):
    screen = CropScreen(store_for_request(request))
    try:
        screen.open_edit(crop_id)
    except RecordNotFound as e:
        return _not_found(request, e, 'farm/crop_form.html', 'crops')
    return _handle_form(request, screen, 'crop_list', 'farm/crop_form.html')


_SAVED_MESSAGES = {
    (CROPS_KEY, False): ('Cultivo agregado', '{name} ha sido agregado exitosamente'),
    (CROPS_KEY, True): ('Cultivo actualizado', '{name} ha sido actualizado exitosamente'),
    (INVENTORY_KEY, False): ('Item agregado', '{name} ha sido agregado al inventario'),
    (INVENTORY_KEY, True): ('Item actualizado', '{name} ha sido actualizado exitosamente'),
}


def _handle_form(request, screen, list_url, template):
    """Shared GET/POST flow for the create and edit forms of both screens."""
    is_editing = screen.editing_id is not None
    if request.method == 'POST':
        screen.edit_fields(request.POST)
        saved = screen.save()
        if saved is not None:
            title, body = _SAVED_MESSAGES[(screen.key, is_editing)]
            messages.success(request, f"{title}: {body.format(name=saved['name'])}")
            return redirect(list_url)
        messages.error(request, _validation_message(screen.form))

    context = {
        'form': screen.form,
        'is_editing': is_editing,
        'editing_id': screen.editing_id,
        'nav': 'crops' if screen.key == CROPS_KEY else 'inventory',
    }
    return render(request, template, context)


def _validation_message(form):
    """Ask for missing fields when any are blank, otherwise point at the marked ones."""
    for errors in form.errors.as_data().values():
        if any(error.code == 'required' for error in errors):
            return REQUIRED_MESSAGE
    return INVALID_MESSAGE


def _not_found(request, error, template, nav):
    logger.warning('Edit target not found: %s', error)
    messages.error(request, 'El registro solicitado no existe')
    context = {'form': None, 'is_editing': True, 'editing_id': error.record_id, 'nav': nav}
    return render(request, template, context, status=404)


# ---------------------------------------------------------------------------
# Monitoring & reports
# ---------------------------------------------------------------------------

@require_GET
def monitoring(request):
    readings = default_monitoring()
    context = {
        'latest': metrics.latest_reading(readings),
        'readings': readings,
        'history': list(reversed(readings)),
        'nav': 'monitoring',
    }
    return render(request, 'farm/monitoring.html', context)


@require_GET
def reports(request):
    store = store_for_request(request)
    crops = store.load(CROPS_KEY)
    inventory = store.load(INVENTORY_KEY)
    window = _window_days()
    context = {
        'reports': [
            metrics.production_report(crops),
            metrics.inventory_report(inventory),
            metrics.planning_report(crops, timezone.localdate(), window),
        ],
        'growing': metrics.count_status(crops, 'growing'),
        'harvesting': metrics.count_status(crops, 'harvesting'),
        'total_area': metrics.total_area(crops),
        'item_count': len(inventory),
        'low_stock': metrics.low_stock_count(inventory),
        'harvested': metrics.harvested_products(inventory),
        'nav': 'reports',
    }
    return render(request, 'farm/reports.html', context)


@require_GET
def sync_status(request):
    """Per-collection save counters; open tabs poll this to notice changes."""
    store = store_for_request(request)
    return JsonResponse(_sync_context(store)['sync_revisions'])
