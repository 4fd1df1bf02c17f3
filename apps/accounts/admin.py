from django.contrib import admin

from apps.accounts.models import AgentSettings, UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = (
        'user', 'name', 'phone', 'address',
        'must_change_password', 'password_changed_at', 'updated_at',
    )
    list_filter = ('must_change_password',)
    search_fields = ('name', 'phone', 'user__username', 'user__email')
    readonly_fields = ('password_changed_at', 'updated_at')
    raw_id_fields = ('user',)


@admin.register(AgentSettings)
class AgentSettingsAdmin(admin.ModelAdmin):
    list_display = (
        'user', 'company_name', 'default_commission',
        'email_notifications', 'expiry_alerts', 'updated_at',
    )
    list_filter = ('email_notifications', 'expiry_alerts', 'language')
    search_fields = ('company_name', 'user__username')
    readonly_fields = ('updated_at',)
    raw_id_fields = ('user',)
