from django.contrib import admin
from .models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ['description', 'owner_id', 'completed', 'created_at', 'updated_at']
    list_filter = ['completed']
    search_fields = ['description']
    readonly_fields = ['owner_id', 'created_at', 'updated_at']
