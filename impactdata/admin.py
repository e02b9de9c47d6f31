"""Admin registrations for impact data models."""

from __future__ import annotations

from django.contrib import admin
from django.db.models import QuerySet

from impactdata.models import DataPoint, Initiative, Location, Metric


class OwnerScopedAdmin(admin.ModelAdmin):
    """ModelAdmin that limits non-superusers to rows under their own initiatives.

    `owner_lookup` is the ORM path from the model to the owning user.
    """

    owner_lookup = "initiative__owner"

    def get_queryset(self, request) -> QuerySet:
        """Return a queryset scoped to the authenticated user's initiatives."""

        qs = super().get_queryset(request)
        if request.user.is_superuser:
            return qs
        return qs.filter(**{self.owner_lookup: request.user})

    def formfield_for_foreignkey(self, db_field, request, **kwargs):  # type: ignore[override]
        """Scope initiative, metric and location choices to the authenticated user."""

        if not request.user.is_superuser:
            base_qs = kwargs.get("queryset") or db_field.remote_field.model._default_manager.all()
            if db_field.name == "initiative":
                kwargs["queryset"] = base_qs.filter(owner=request.user)
            elif db_field.name in {"metric", "location"}:
                kwargs["queryset"] = base_qs.filter(initiative__owner=request.user)
        return super().formfield_for_foreignkey(db_field, request, **kwargs)


@admin.register(Initiative)
class InitiativeAdmin(OwnerScopedAdmin):
    """Admin configuration for Initiative."""

    owner_lookup = "owner"
    list_display = ("title", "owner", "created_at")
    search_fields = ("title",)

    def get_readonly_fields(self, request, obj=None):  # type: ignore[override]
        """Prevent non-superusers from reassigning ownership."""

        readonly = list(super().get_readonly_fields(request, obj=obj))
        if not request.user.is_superuser and "owner" not in readonly:
            readonly.append("owner")
        return tuple(readonly)

    def save_model(self, request, obj, form, change) -> None:  # type: ignore[override]
        """Assign ownership automatically for non-superusers."""

        if not request.user.is_superuser and not change:
            obj.owner = request.user
        super().save_model(request, obj, form, change)


@admin.register(Location)
class LocationAdmin(OwnerScopedAdmin):
    """Admin configuration for Location."""

    list_display = ("name", "initiative", "latitude", "longitude")
    list_filter = ("initiative",)


@admin.register(Metric)
class MetricAdmin(OwnerScopedAdmin):
    """Admin configuration for Metric."""

    list_display = ("title", "initiative", "category", "unit_of_measurement", "display_order")
    list_filter = ("initiative", "category")
    search_fields = ("title",)


@admin.register(DataPoint)
class DataPointAdmin(OwnerScopedAdmin):
    """Admin configuration for DataPoint."""

    owner_lookup = "metric__initiative__owner"
    list_display = ("metric", "value", "date_represented", "date_range_start", "date_range_end", "location")
    list_filter = ("metric__initiative", "metric")
