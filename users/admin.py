from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User

@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'supabase_id', 'is_staff', 'date_joined')
    list_filter = ('is_staff', 'is_superuser', 'is_active')
    search_fields = ('username', 'email', 'supabase_id')
    fieldsets = UserAdmin.fieldsets + (
        ('Identity Provider', {'fields': ('supabase_id',)}),
    )
