from django.http import JsonResponse

from apps.orders.providers import get_store


def health_view(_request):
    store = get_store()
    with store.lock:
        components = {
            "catalog": {"ok": all(i.stock >= 0 for i in store.catalog.list()), "items": len(store.catalog)},
            "offers": {"ok": True, "offers": len(store.offers)},
            "orders": {"ok": True, "orders": len(store.orders)},
        }

    ok = all(c["ok"] for c in components.values())
    code = 200 if ok else 503
    return JsonResponse(
        {"ok": ok, "components": components},
        status=code,
    )
