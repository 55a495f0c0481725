from django.contrib import admin
from .models import Team, Event, AvailabilitySlot

@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ('name', 'color', 'created_at')
    search_fields = ('name',)

@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ('name', 'team_a', 'team_b', 'start_date', 'end_date', 'created_by', 'created_at')
    list_filter = ('start_date', 'team_a', 'team_b')
    search_fields = ('name', 'description', 'created_by__email')
    date_hierarchy = 'start_date'

@admin.register(AvailabilitySlot)
class AvailabilitySlotAdmin(admin.ModelAdmin):
    list_display = ('event', 'user', 'team', 'day_index', 'hour_index', 'created_at')
    list_filter = ('team', 'day_index')
    search_fields = ('event__name', 'user__email', 'team__name')
