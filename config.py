"""
Report-to-Ledger Converter - Configuration
POS and payroll report conversion to journal entry imports
"""

import os
from decimal import Decimal

# Base paths
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.environ.get('REPORT_LEDGER_DATA_DIR', os.path.join(BASE_DIR, 'data'))

# CSV/XLSX content is built in-memory.
# The CLI writes to the directory given with --output (current dir otherwise).

# Verbose [DEBUG] output from parsers and aggregators
DEBUG = os.environ.get('REPORT_LEDGER_DEBUG', 'False').lower() == 'true'

# Worker threads for batch text extraction (1 = sequential)
MAX_WORKERS = int(os.environ.get('REPORT_LEDGER_WORKERS', 4))

# Journal date formats
INPUT_DATE_FORMATS = ["%Y-%m-%d", "%m/%d/%Y", "%m/%d/%y", "%m-%d-%Y"]

# Journal import layout (QuickBooks Online journal import)
JOURNAL_CSV_HEADER = [
    '*JournalNo', '*JournalDate', '*AccountName', '*Debits', '*Credits',
    'Description', 'Name', 'Currency', 'Location', 'Class'
]
CURRENCY = 'USD'
POS_JOURNAL_DESCRIPTION = 'To record sales'
PAYROLL_JOURNAL_DESCRIPTION = 'To record payroll'

# Missing / zero cells in the consolidated comparison table
NOT_AVAILABLE = 'N/A'

# Allow 1 cent rounding difference
BALANCE_TOLERANCE = Decimal('0.01')

# Shortest span accepted as a real table section (menus/TOC fragments are shorter)
MIN_SECTION_LENGTH = 40

# Settlement account used when a location has no mapping (fl008's bank)
DEFAULT_BANK_ACCOUNT = 'Fifth Third Checking 4681'
LOCATION_BANKS_FILE = os.path.join(DATA_DIR, 'location_banks.json')

# POS journal accounts
POS_ACCOUNTS = {
    'net_sales': 'Sales',
    'taxes': 'State Sales Tax Payable',
    'delivery_fees': 'Delivery Income',
    'accounts_receivable': 'Accounts Receivable',
    'gift_cards': 'Gift Cards',
    'delivery_tips': 'Third-Party Delivery Fees:Door Dash Drive',
    'order_discounts': 'Third-Party Delivery Fees',
    'cash_over_short': 'Operating Expenses:Cash (Over)/Short',
}

DISCOUNT_ACCOUNTS = {
    'Non Vouchered Customer Credits': 'Discounts & Comps:Non-Vouchered',
    'Customer Credits': 'Discounts & Comps:Customer Credits',
    'Discounts': 'Discounts & Comps:Discounts',
    'Complimentary': 'Discounts & Comps:Complimentary',
}

CATEGORY_SALES_ACCOUNTS = {
    'Beverage': 'Prepared Food Sales:Sales - Pop',
    'Catering': 'Prepared Food Sales:Sales - Catering',
    'Dessert': 'Prepared Food Sales:Sales - Dessert',
    "Jet's Bread": 'Prepared Food Sales:Sales - Jet Bread',
    'Pizza': 'Prepared Food Sales:Sales - Pizza',
    'Salad': 'Prepared Food Sales:Sales - Salads',
    'Sandwiches': 'Prepared Food Sales:Sales - Subs',
    'Sides': 'Prepared Food Sales:Sales - Sides',
    'Wings': 'Prepared Food Sales:Sales - Wings',
}

# Payroll journal accounts
PAYROLL_ACCOUNTS = {
    'salaries_wages': 'Payroll Expenses:Salaries & Wages:Salaries & Wages',
    'management_bonuses': 'Payroll Expenses:Salaries & Wages:Management Bonuses',
    'guaranteed_payments': 'Payroll Expenses:Guaranteed Payments:Guaranteed Payments',
    'guaranteed_payments_bonus': 'Payroll Expenses:Guaranteed Payments:Guaranteed Payments - Bonus',
    'payroll_taxes': 'Payroll Expenses:Payroll Taxes',
    'mileage': 'Delivery Income:Mileage Reimbursement',
    'medical_insurance': 'Insurance:Medical Insurance',
}

# Earning codes rolled into the Salaries & Wages line
SALARY_EARNING_CODES = ['REG', 'OT', 'HOLIDAY', 'RETRO', 'CASH']
EMPLOYER_TAX_CODES = ['MED-R', 'SS-R', 'FLSUI', 'FUTA']
MEDICAL_DEDUCTION_CODES = ['MDCL', 'MDCLP']

# Supported input files
SUPPORTED_REPORT_EXTENSIONS = ['.pdf', '.txt']

# Output file names
OUTPUT_FILES = {
    'CONSOLIDATED': 'pos_consolidated.csv',
    'CONSOLIDATED_XLSX': 'pos_consolidated.xlsx',
    'JOURNALS_ZIP': 'journal_entries.zip',
    'PAYROLL': 'Payroll_{journal_no}.csv',
}

# Flask settings
FLASK_HOST = '0.0.0.0'  # Listen on all interfaces for deployment
FLASK_PORT = int(os.environ.get('PORT', 8590))
FLASK_DEBUG = os.environ.get('FLASK_DEBUG', 'False').lower() == 'true'
MAX_UPLOAD_BYTES = 50 * 1024 * 1024
