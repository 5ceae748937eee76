"""
Business records of the church back office.

Every table here carries the ``is_demo_data`` flag that separates seeded
sample rows from production data. Table names are fixed because backup
documents refer to them directly.
"""

from django.db import models
from django.db.models.functions import Now


class DemoFlaggedModel(models.Model):
    """Abstract base for tables that partition demo and production rows."""

    id = models.CharField(max_length=50, primary_key=True)
    # NULL is treated as production data, same as False
    is_demo_data = models.BooleanField(null=True, db_default=False)
    created_at = models.DateTimeField(db_default=Now())

    class Meta:
        abstract = True


class ChurchUser(DemoFlaggedModel):
    """Back office account (staff member allowed to log into the system)."""

    ROLE_CHOICES = [
        ('Admin', 'Admin'),
        ('HR Officer', 'HR Officer'),
        ('Finance Officer', 'Finance Officer'),
        ('User', 'User'),
    ]

    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    password_hash = models.CharField(max_length=255)
    role = models.CharField(max_length=50, choices=ROLE_CHOICES, db_default='User')
    department = models.CharField(max_length=100, null=True, blank=True)
    phone = models.CharField(max_length=30, null=True, blank=True)
    is_active = models.BooleanField(db_default=True)
    can_create_accounts = models.BooleanField(db_default=False)
    can_delete_accounts = models.BooleanField(db_default=False)

    class Meta:
        db_table = 'users'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.role})"


class Member(DemoFlaggedModel):
    member_number = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=255)
    email = models.EmailField(null=True, blank=True)
    phone = models.CharField(max_length=30, null=True, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=20, null=True, blank=True)
    marital_status = models.CharField(max_length=20, null=True, blank=True)
    occupation = models.CharField(max_length=100, null=True, blank=True)
    address = models.TextField(null=True, blank=True)
    membership_date = models.DateField(null=True, blank=True)
    membership_status = models.CharField(max_length=20, db_default='Active')
    service_group = models.CharField(max_length=100, null=True, blank=True)
    department = models.CharField(max_length=100, null=True, blank=True)

    class Meta:
        db_table = 'members'
        ordering = ['member_number']

    def __str__(self):
        return f"{self.member_number} {self.name}"


class FinancialTransaction(DemoFlaggedModel):
    TYPE_CHOICES = [
        ('Income', 'Income'),
        ('Expense', 'Expense'),
    ]

    transaction_number = models.CharField(max_length=30, unique=True)
    transaction_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    category = models.CharField(max_length=100)
    amount = models.DecimalField(max_digits=15, decimal_places=2)
    description = models.TextField(null=True, blank=True)
    transaction_date = models.DateField()
    payment_method = models.CharField(max_length=50, null=True, blank=True)
    recorded_by = models.CharField(max_length=50, null=True, blank=True)
    status = models.CharField(max_length=20, db_default='Pending')

    class Meta:
        db_table = 'financial_transactions'
        ordering = ['-transaction_date']

    def __str__(self):
        return f"{self.transaction_number} {self.transaction_type} {self.amount}"


class Employee(DemoFlaggedModel):
    employee_number = models.CharField(max_length=20, unique=True)
    name = models.CharField(max_length=255)
    email = models.EmailField(null=True, blank=True)
    phone = models.CharField(max_length=30, null=True, blank=True)
    department = models.CharField(max_length=100, null=True, blank=True)
    position = models.CharField(max_length=100, null=True, blank=True)
    employment_type = models.CharField(max_length=30, db_default='Full-time')
    hire_date = models.DateField(null=True, blank=True)
    basic_salary = models.DecimalField(max_digits=12, decimal_places=2, db_default=0)
    status = models.CharField(max_length=20, db_default='Active')

    class Meta:
        db_table = 'employees'
        ordering = ['employee_number']

    def __str__(self):
        return f"{self.employee_number} {self.name}"


class InventoryItem(DemoFlaggedModel):
    item_code = models.CharField(max_length=30, unique=True)
    name = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    category = models.CharField(max_length=100, null=True, blank=True)
    sub_category = models.CharField(max_length=100, null=True, blank=True)
    unit_of_measure = models.CharField(max_length=30, db_default='pieces')
    current_quantity = models.IntegerField(db_default=0)
    minimum_quantity = models.IntegerField(db_default=0)
    unit_cost = models.DecimalField(max_digits=12, decimal_places=2, db_default=0)
    location = models.CharField(max_length=100, null=True, blank=True)
    supplier = models.CharField(max_length=255, null=True, blank=True)
    condition_status = models.CharField(max_length=30, db_default='Good')
    status = models.CharField(max_length=20, db_default='Active')

    class Meta:
        db_table = 'inventory_items'
        ordering = ['item_code']

    def __str__(self):
        return f"{self.item_code} {self.name}"


class WelfareRequest(DemoFlaggedModel):
    request_number = models.CharField(max_length=30, unique=True)
    applicant_name = models.CharField(max_length=255)
    member_id = models.CharField(max_length=50, null=True, blank=True)
    request_type = models.CharField(max_length=50)
    amount_requested = models.DecimalField(max_digits=12, decimal_places=2, db_default=0)
    reason = models.TextField(null=True, blank=True)
    status = models.CharField(max_length=20, db_default='Pending')
    request_date = models.DateField(null=True, blank=True)

    class Meta:
        db_table = 'welfare_requests'
        ordering = ['-request_date']

    def __str__(self):
        return f"{self.request_number} {self.applicant_name}"


class MessageHistory(DemoFlaggedModel):
    message_type = models.CharField(max_length=20, db_default='SMS')
    subject = models.CharField(max_length=255, null=True, blank=True)
    body = models.TextField()
    recipient_count = models.IntegerField(db_default=0)
    sent_by = models.CharField(max_length=50, null=True, blank=True)
    sent_at = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=20, db_default='Sent')

    class Meta:
        db_table = 'message_history'
        ordering = ['-sent_at']
        verbose_name_plural = 'message history'

    def __str__(self):
        return f"{self.message_type}: {self.subject or self.body[:30]}"


class Event(DemoFlaggedModel):
    title = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    event_date = models.DateField()
    start_time = models.TimeField(null=True, blank=True)
    end_time = models.TimeField(null=True, blank=True)
    location = models.CharField(max_length=255, null=True, blank=True)
    organizer = models.CharField(max_length=255, null=True, blank=True)
    status = models.CharField(max_length=20, db_default='Scheduled')

    class Meta:
        db_table = 'events'
        ordering = ['event_date']

    def __str__(self):
        return f"{self.title} ({self.event_date})"


class Appointment(DemoFlaggedModel):
    title = models.CharField(max_length=255)
    attendee_name = models.CharField(max_length=255)
    appointment_date = models.DateField()
    appointment_time = models.TimeField(null=True, blank=True)
    purpose = models.TextField(null=True, blank=True)
    status = models.CharField(max_length=20, db_default='Scheduled')

    class Meta:
        db_table = 'appointments'
        ordering = ['appointment_date']

    def __str__(self):
        return f"{self.title} with {self.attendee_name}"
