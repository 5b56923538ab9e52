"""
Field Rules - Extraction rule tables for POS and payroll reports

POS rules target SpeedLine end-of-period reports; payroll rules target
Paylocity "Labor Distribution - Detail" report totals. To support a new
report wording, add a pattern to the field's list - no code changes needed.
"""

from .field_extractor import ExtractionRule, rules_from_mapping
from .section_extractor import SectionBounds

# Money capture: optional "$", thousands commas, exactly two decimals
AMOUNT = r'\$?\s*([\d,]+\.\d{2})'
# Units column printed before the amount on discount rows
COUNT = r'\s+\d+\s+'
# Parenthesised (or minus-signed) amount, captured with its sign
SIGNED_AMOUNT = r'\$?\s*(\(\s*\$?\s*[\d,]+\.\d{2}\s*\)|-\s*\$?\s*[\d,]+\.\d{2})'

# ═══════════════════════════════════════════════════════════════
# POINT OF SALE
# ═══════════════════════════════════════════════════════════════

POS_FIELD_PATTERNS = {
    # Sales
    "Net Sales": [r'NET\s+SALES\s+' + AMOUNT],
    "Taxes": [r'\bTaxes?\s+' + AMOUNT],
    "Delivery Charges": [r'Delivery\s+Charges' + COUNT + AMOUNT],
    "Min Charges": [r'Min(?:imum)?\s+Charges' + COUNT + AMOUNT],

    # Reconciliation
    "House Account Sales": [r'House\s+Account\s+Sales\s+' + SIGNED_AMOUNT],
    "House Account Payments": [r'House\s+Account\s+Payments\s+' + AMOUNT],
    "Gift Card Activations and Add": [r'Gift\s+Card\s+Activations?\s+and\s+Add\s+' + AMOUNT],
    "Third-Party Delivery Tips": [r'Third[-\s]Party\s+Delivery\s+Tips\s+' + AMOUNT],

    # Discounts & Comps
    "Non Vouchered Customer Credits": [
        r'Non[-\s]?Vouchered(?:\s+Customer\s+Credits)?' + COUNT + AMOUNT,
    ],
    "Customer Credits": [
        r'\b(?P<skip>Vouchered\s+)?Customer\s+Credits' + COUNT + AMOUNT,
    ],
    "Discounts": [r'\b(?P<skip>Order\s+)?Discounts' + COUNT + AMOUNT],
    "Order Discounts": [r'Order\s+Discounts' + COUNT + AMOUNT],
    "Complimentary": [r'Complimentary' + COUNT + AMOUNT],

    # Tenders
    "Visa": [r'\bVisa\s+' + AMOUNT],
    "Mastercard": [r'\bMaster\s*Card\s+' + AMOUNT],
    "Discover": [r'\bDiscover\s+' + AMOUNT],
    "Amex": [r'American\s+Express\s+' + AMOUNT + r'|\bAMEX\s+' + AMOUNT],
    "Cash": [r'\bCash\s+' + AMOUNT],
    "UberEats": [r'UberEats\s+' + AMOUNT + r'|UBER\s+EATS\s+' + AMOUNT],
    "Door Dash": [r'Door\s*Dash\s+' + AMOUNT],
    "Grubhub": [r'Grub\s*Hub\s+' + AMOUNT],
    "EZ CATER": [r'\bEZ\s*CATER\s+' + AMOUNT],
    "Gift Card": [r'\bGift\s+' + AMOUNT, r'\bGift\s+Card\s+' + AMOUNT],
    "Text Order Credit": [r'Text\s+Order\s+Credit\s+' + AMOUNT],
    "Square": [r'\bSquare\s+' + AMOUNT],
    "Online Ordering": [r'Online\s+Ordering\s+' + AMOUNT],
    "Check": [r'\bCheck\s+' + AMOUNT],
    "JetBot Prepaid": [r'JetBot\s+Prepaid\s+' + AMOUNT],
}

POS_FIELD_RULES = rules_from_mapping(POS_FIELD_PATTERNS)

# Item categories sold table: category -> names it is printed under
ITEM_CATEGORIES = {
    "Beverage": ["Beverages", "Beverage"],
    "Catering": ["Catering"],
    "Dessert": ["Desserts", "Dessert"],
    "Jet's Bread": ["Jet's Bread", "Jets Bread", "Jet’s Bread"],
    "Pizza": ["Pizza"],
    "Salad": ["Salads", "Salad"],
    "Sandwiches": ["Sandwiches", "Sandwich"],
    "Sides": ["Sides", "Side"],
    "Wings": ["Wings", "Wing"],
}

ITEM_CATEGORY_SECTION = SectionBounds(
    start=r'ITEM\s+CATEGORIES\s+SOLD',
    end=[r'Sales\s*/\s*Tender', r'SpeedLine'],
    header=r'\b(?:Units|Qty)\s+(?:[A-Za-z%]+\s+){0,3}?Gross\b',
)

# ═══════════════════════════════════════════════════════════════
# PAYROLL
# ═══════════════════════════════════════════════════════════════

# "<code> <description> <hours> <amount>"
EARNING_PATTERNS = {
    'REG': [r'\bREG\s+Reg\s+[\d.]+\s+' + AMOUNT],
    'OT': [r'\bOT\s+OT\s+[\d.]+\s+' + AMOUNT],
    'BONUS': [r'\bBONUS\s+Bonus\s+[\d.]+\s+' + AMOUNT],
    'CASH': [r'\bCASH\s+CASH\s+[\d.]+\s+' + AMOUNT],
    'DBONU': [r'\bDBONU\s+dbonu\s+[\d.]+\s+' + AMOUNT],
    'DRAW': [r'\bDRAW\s+DRAW\s+[\d.]+\s+' + AMOUNT],
    'HOLIDAY': [r'\bHOLIDAY\s+Holiday\s+[\d.]+\s+' + AMOUNT],
    'RETRO': [r'\bRETRO\s+Retro\s+[\d.]+\s+' + AMOUNT],
}

# Employee taxes (withheld)
EMPLOYEE_TAX_PATTERNS = {
    'FITW': [r'\bFITW\s+' + AMOUNT],
    'MED': [r'\bMED\s+' + AMOUNT],
    'SS': [r'\bSS\s+' + AMOUNT],
    'FL': [r'\bFL\s+' + AMOUNT],
}

EMPLOYER_TAX_PATTERNS = {
    'MED-R': [r'\bMED-R\s+' + AMOUNT],
    'SS-R': [r'\bSS-R\s+' + AMOUNT],
    'FLSUI': [r'\bFLSUI\s+' + AMOUNT],
    'FUTA': [r'\bFUTA\s+' + AMOUNT],
}

# CASH deductions print no hours column; the lookahead keeps CASH earnings rows out
DEDUCTION_PATTERNS = {
    'MDCL': [r'\bMDCL\s+Medical\s+' + AMOUNT],
    'MDCLP': [r'\bMDCLP\s+MDCLP\s+' + AMOUNT],
    'DNTL': [r'\bDNTL\s+Dental\s+' + AMOUNT],
    'DNTLP': [r'\bDNTLP\s+DNTLP\s+' + AMOUNT],
    'VISON': [r'\bVISON\s+Vision\s+' + AMOUNT],
    'VISNP': [r'\bVISNP\s+VISNP\s+' + AMOUNT],
    'MILES': [r'\bMILES\s+MILES\s+-?' + AMOUNT],
    'CASH': [r'\bCASH\s+CASH\s+' + AMOUNT + r'(?!\s+\$?[\d,]+\.\d{2})'],
}

EARNING_RULES = rules_from_mapping(EARNING_PATTERNS)
EMPLOYEE_TAX_RULES = rules_from_mapping(EMPLOYEE_TAX_PATTERNS)
EMPLOYER_TAX_RULES = rules_from_mapping(EMPLOYER_TAX_PATTERNS)
DEDUCTION_RULES = rules_from_mapping(DEDUCTION_PATTERNS)

NET_PAY_RULE = ExtractionRule('Net Pay', (
    r'\bEE\s+Net\s+' + AMOUNT,
    r'\bNet\s+Pay\s+' + AMOUNT,
))

REPORT_TOTALS_SECTION = SectionBounds(
    start=r'Report\s+Totals',
    end=[r'Paylocity\s+Corporation'],
    min_length=1,
    include_start=True,
)

# Header metadata (single-shot string captures)
HEADER_PATTERNS = {
    'location': [
        r'\bLocation(?:\s+Code)?\s*:\s*([A-Za-z]*\d+)',
        r'\bLoc\s*:\s*([A-Za-z]*\d+)',
    ],
    'company_name': [r'^\s*(\S.*?)\s+\(\d+\)'],
    'check_date': [r'Check\s+Date:\s*(\d{1,2}[/\\]\d{1,2}[/\\]\d{4})'],
    'pay_period': [r'Pay\s+Period:\s*([\d/\\]+\s+to\s+[\d/\\]+)'],
}
