"""
First-run data: the default administrator and a small demo data set.

Sample rows are inserted as demo data so that ``clean_demo_data`` removes
them again once the church starts entering real records.
"""

from django.contrib.auth.hashers import make_password
from django.utils import timezone
from decouple import config

from .gateway import TableGateway

DEFAULT_ADMIN_ID = 'admin_001'
DEFAULT_ADMIN_EMAIL = 'admin@tsoam.com'

SAMPLE_DATA = {
    'members': [
        {
            'id': 'MEM_001',
            'member_number': 'TM001',
            'name': 'John Doe',
            'email': 'john@example.com',
            'phone': '+254700000001',
            'date_of_birth': '1985-06-15',
            'gender': 'Male',
            'marital_status': 'Married',
            'occupation': 'Teacher',
            'address': '123 Main Street, Nairobi',
            'membership_date': '2020-01-15',
            'membership_status': 'Active',
            'service_group': 'Adult Ministry',
            'department': 'Ushering',
        },
        {
            'id': 'MEM_002',
            'member_number': 'TM002',
            'name': 'Jane Smith',
            'email': 'jane@example.com',
            'phone': '+254700000002',
            'date_of_birth': '1990-03-22',
            'gender': 'Female',
            'marital_status': 'Single',
            'occupation': 'Nurse',
            'address': '456 Oak Avenue, Nairobi',
            'membership_date': '2021-05-10',
            'membership_status': 'Active',
            'service_group': 'Youth Ministry',
            'department': 'Music',
        },
    ],
    'financial_transactions': [
        {
            'id': 'TXN_001',
            'transaction_number': 'T001',
            'transaction_type': 'Income',
            'category': 'Tithes',
            'amount': '50000.00',
            'description': 'Sunday Service Tithes Collection',
            'transaction_date': '2025-01-01',
            'payment_method': 'Cash',
            'recorded_by': DEFAULT_ADMIN_ID,
            'status': 'Approved',
        },
        {
            'id': 'TXN_002',
            'transaction_number': 'T002',
            'transaction_type': 'Expense',
            'category': 'Utilities',
            'amount': '15000.00',
            'description': 'Electricity Bill Payment',
            'transaction_date': '2025-01-05',
            'payment_method': 'Bank Transfer',
            'recorded_by': DEFAULT_ADMIN_ID,
            'status': 'Approved',
        },
    ],
    'inventory_items': [
        {
            'id': 'INV_001',
            'item_code': 'CHAIR001',
            'name': 'Church Chair',
            'description': 'Plastic chairs for congregation seating',
            'category': 'Furniture',
            'sub_category': 'Seating',
            'unit_of_measure': 'pieces',
            'current_quantity': 100,
            'minimum_quantity': 50,
            'unit_cost': '1500.00',
            'location': 'Main Hall',
            'supplier': 'Furniture Plus Ltd',
            'condition_status': 'Good',
            'status': 'Active',
        },
        {
            'id': 'INV_002',
            'item_code': 'SOUND001',
            'name': 'Sound System',
            'description': 'Main sound system for church services',
            'category': 'Electronics',
            'sub_category': 'Audio Equipment',
            'unit_of_measure': 'set',
            'current_quantity': 1,
            'minimum_quantity': 1,
            'unit_cost': '250000.00',
            'location': 'Main Hall',
            'supplier': 'Audio Tech Solutions',
            'condition_status': 'New',
            'status': 'Active',
        },
    ],
}


def create_default_admin(gateway=None, password=None):
    """
    Insert the default administrator into ``users``.

    Returns False when an account with the same id already exists.
    """
    gateway = gateway or TableGateway()
    if gateway.exists('users', 'id', DEFAULT_ADMIN_ID):
        return False

    password = password or config('DEFAULT_ADMIN_PASSWORD', default='admin123')
    gateway.insert('users', {
        'id': DEFAULT_ADMIN_ID,
        'name': 'System Administrator',
        'email': DEFAULT_ADMIN_EMAIL,
        'password_hash': make_password(password),
        'role': 'Admin',
        'department': 'Administration',
        'phone': '+254700000000',
        'is_active': True,
        'can_create_accounts': True,
        'can_delete_accounts': True,
        'created_at': timezone.now(),
    }, is_demo=False)
    return True


def insert_sample_data(gateway=None):
    """Insert the demo data set, skipping rows already present. Returns inserted counts."""
    gateway = gateway or TableGateway()
    inserted = {}
    for table, records in SAMPLE_DATA.items():
        inserted[table] = 0
        for record in records:
            if gateway.exists(table, 'id', record['id']):
                continue
            gateway.insert(table, record, is_demo=True)
            inserted[table] += 1
    return inserted
