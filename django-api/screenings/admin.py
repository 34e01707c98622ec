from django.contrib import admin

from screenings.models import Movie, Room, Screening, Ticket


class ScreeningInline(admin.TabularInline):
    model = Screening
    extra = 0
    fields = ["movie", "starts_at", "ends_at"]
    readonly_fields = ["movie", "starts_at", "ends_at"]
    can_delete = False


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ["name", "type", "capacity", "maintenance"]
    list_filter = ["type", "maintenance", "handicap_access"]
    search_fields = ["name"]
    inlines = [ScreeningInline]


@admin.register(Movie)
class MovieAdmin(admin.ModelAdmin):
    list_display = ["title", "director", "genre", "duration_ms"]
    search_fields = ["title", "director"]


@admin.register(Screening)
class ScreeningAdmin(admin.ModelAdmin):
    """Read-only: screenings are scheduled through the API so overlap rules apply."""

    list_display = ["movie", "room", "starts_at", "ends_at"]
    list_filter = ["room"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["id", "kind", "created_at"]
    list_filter = ["kind"]

    def get_readonly_fields(self, request, obj=None):
        # type changes and attachments go through the ticket gate
        if obj is None:
            return ["screenings"]
        return ["kind", "screenings"]
