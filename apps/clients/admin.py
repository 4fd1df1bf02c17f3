from django.contrib import admin

from apps.clients.models import ClientRecord


@admin.register(ClientRecord)
class ClientRecordAdmin(admin.ModelAdmin):
    list_display = (
        'full_name', 'phone', 'vehicle_number', 'policy_type',
        'start_date', 'renewal_date', 'premium', 'commission',
        'created_by', 'created_at',
    )
    list_filter = ('policy_type', 'start_date', 'created_at')
    search_fields = ('full_name', 'phone', 'email', 'vehicle_number')
    readonly_fields = ('id', 'created_at', 'created_by')

    def save_model(self, request, obj, form, change):
        if not change:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)

    def has_change_permission(self, request, obj=None):
        # Records are captured and deleted, never edited in place
        return False
