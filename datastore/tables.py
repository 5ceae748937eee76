"""
Fixed table sets used by backups, restores and demo data cleaning.

Backup documents refer to tables by these names, so changing them breaks
compatibility with existing backup files.
"""

SETTINGS_TABLE = 'system_settings'

# Tables that get is_demo_data injected on insert and are swept by the cleaner
DEMO_TABLES = (
    'members',
    'financial_transactions',
    'employees',
    'inventory_items',
    'welfare_requests',
    'message_history',
    'events',
    'appointments',
)

# Capture order of a backup snapshot
BACKUP_TABLES = ('users',) + DEMO_TABLES + (SETTINGS_TABLE,)

DEMO_FLAG_COLUMN = 'is_demo_data'


def has_demo_flag(table):
    """Every backed-up table except the settings table carries the demo flag."""
    return table in BACKUP_TABLES and table != SETTINGS_TABLE


# Column identifying an existing row on restore when it differs from the primary key
RESTORE_KEYS = {
    SETTINGS_TABLE: 'setting_key',
}
