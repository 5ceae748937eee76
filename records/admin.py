from django.contrib import admin
from django.utils.html import format_html

from .models import (
    ChurchUser,
    Member,
    FinancialTransaction,
    Employee,
    InventoryItem,
    WelfareRequest,
    MessageHistory,
    Event,
    Appointment,
)


class DemoFlaggedAdmin(admin.ModelAdmin):
    """Shared admin behaviour for tables carrying the demo data flag."""

    list_filter = ['is_demo_data']
    readonly_fields = ['created_at']

    def demo_status(self, obj):
        """Show demo rows in orange so they are not mistaken for real data."""
        if obj.is_demo_data:
            return format_html(
                '<span style="color: orange; font-weight: bold;">Demo</span>'
            )
        return 'Production'
    demo_status.short_description = "Data"


@admin.register(ChurchUser)
class ChurchUserAdmin(DemoFlaggedAdmin):
    list_display = ['id', 'name', 'email', 'role', 'department', 'is_active', 'demo_status']
    search_fields = ['name', 'email']
    exclude = ['password_hash']


@admin.register(Member)
class MemberAdmin(DemoFlaggedAdmin):
    list_display = ['member_number', 'name', 'membership_status', 'service_group', 'demo_status']
    search_fields = ['member_number', 'name', 'email']


@admin.register(FinancialTransaction)
class FinancialTransactionAdmin(DemoFlaggedAdmin):
    list_display = ['transaction_number', 'transaction_type', 'category', 'amount',
                    'transaction_date', 'status', 'demo_status']
    search_fields = ['transaction_number', 'description']


@admin.register(Employee)
class EmployeeAdmin(DemoFlaggedAdmin):
    list_display = ['employee_number', 'name', 'department', 'position', 'status', 'demo_status']
    search_fields = ['employee_number', 'name']


@admin.register(InventoryItem)
class InventoryItemAdmin(DemoFlaggedAdmin):
    list_display = ['item_code', 'name', 'category', 'current_quantity', 'location', 'demo_status']
    search_fields = ['item_code', 'name']


@admin.register(WelfareRequest)
class WelfareRequestAdmin(DemoFlaggedAdmin):
    list_display = ['request_number', 'applicant_name', 'request_type', 'amount_requested',
                    'status', 'demo_status']


@admin.register(MessageHistory)
class MessageHistoryAdmin(DemoFlaggedAdmin):
    list_display = ['id', 'message_type', 'subject', 'recipient_count', 'sent_at', 'demo_status']


@admin.register(Event)
class EventAdmin(DemoFlaggedAdmin):
    list_display = ['title', 'event_date', 'location', 'status', 'demo_status']


@admin.register(Appointment)
class AppointmentAdmin(DemoFlaggedAdmin):
    list_display = ['title', 'attendee_name', 'appointment_date', 'status', 'demo_status']
