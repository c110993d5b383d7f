"""Tax category catalogue.

Categories have a stable key (``CAR_TRUCK_EXPENSES``) and a display value
(``Car and Truck Expenses``). Rules and transactions store the display value;
the AI service answers with keys. Both forms are accepted on input.
"""

CATEGORIES: dict[str, str] = {
    # Income
    "GROSS_RECEIPTS": "Gross Receipts or Sales",
    "RETURNS_ALLOWANCES": "Returns and Allowances",
    "OTHER_INCOME": "Other Income",
    # Cost of goods sold
    "COST_OF_GOODS_SOLD": "Cost of Goods Sold",
    "INVENTORY_PURCHASES": "Inventory Purchases",
    "COST_OF_LABOR": "Cost of Labor (not wages)",
    "MATERIALS_SUPPLIES": "Materials and Supplies",
    "OTHER_COSTS": "Other Costs (shipping, packaging)",
    # Schedule C expenses
    "ADVERTISING": "Advertising",
    "CAR_TRUCK_EXPENSES": "Car and Truck Expenses",
    "COMMISSIONS_FEES": "Commissions and Fees",
    "CONTRACT_LABOR": "Contract Labor",
    "DEPLETION": "Depletion",
    "DEPRECIATION": "Depreciation and Section 179",
    "EMPLOYEE_BENEFIT_PROGRAMS": "Employee Benefit Programs",
    "INSURANCE_OTHER": "Insurance (Other than Health)",
    "INTEREST_MORTGAGE": "Interest (Mortgage)",
    "INTEREST_OTHER": "Interest (Other)",
    "LEGAL_PROFESSIONAL": "Legal and Professional Services",
    "OFFICE_EXPENSES": "Office Expenses",
    "PENSION_PROFIT_SHARING": "Pension and Profit-Sharing Plans",
    "RENT_LEASE_VEHICLES": "Rent or Lease (Vehicles, Machinery, Equipment)",
    "RENT_LEASE_OTHER": "Rent or Lease (Other Business Property)",
    "REPAIRS_MAINTENANCE": "Repairs and Maintenance",
    "SUPPLIES": "Supplies (Not Inventory)",
    "TAXES_LICENSES": "Taxes and Licenses",
    "TRAVEL": "Travel",
    "MEALS": "Meals",
    "UTILITIES": "Utilities",
    "WAGES": "Wages (Less Employment Credits)",
    # Other expenses
    "OTHER_EXPENSES": "Other Expenses",
    "SOFTWARE_SUBSCRIPTIONS": "Software Subscriptions",
    "WEB_HOSTING": "Web Hosting & Domains",
    "BANK_FEES": "Bank Fees",
    "BAD_DEBTS": "Bad Debts",
    "DUES_MEMBERSHIPS": "Dues & Memberships",
    "TRAINING_EDUCATION": "Training & Education",
    "TRADE_PUBLICATIONS": "Trade Publications",
    "SECURITY_SERVICES": "Security Services",
    "BUSINESS_GIFTS": "Business Gifts",
    "UNIFORMS_SAFETY": "Uniforms & Safety Gear",
    "TOOLS_EQUIPMENT": "Tools (Under $2,500)",
    # Special
    "BUSINESS_USE_HOME": "Business Use of Home",
    "PERSONAL_EXPENSE": "Personal Expense",
    "PERSONAL_TRANSFER": "Personal Transfer",
    "OWNER_DRAWS": "Owner Draws/Distributions",
    "OWNER_CONTRIBUTION": "Owner Contribution/Capital",
    "UNCATEGORIZED": "Uncategorized",
    # Neutral (balance sheet movements, neither income nor expense)
    "TRANSFER_BETWEEN_ACCOUNTS": "Transfer Between Accounts",
    "LOAN_RECEIVED": "Loan Received",
    "LOAN_PAYMENT": "Loan Payment (Principal)",
    "REFUND_RECEIVED": "Refund Received",
    "REFUND_ISSUED": "Refund Issued",
    "CREDIT_CARD_PAYMENT": "Credit Card Payment",
    "SALES_TAX_COLLECTED": "Sales Tax Collected",
    "SALES_TAX_PAYMENT": "Sales Tax Payment",
    "PAYROLL_TAX_DEPOSIT": "Payroll Tax Deposit",
    "REIMBURSEMENT_RECEIVED": "Reimbursement Received",
    "REIMBURSEMENT_PAID": "Reimbursement Paid",
    "PERSONAL_FUNDS_ADDED": "Personal Funds Added",
    "PERSONAL_FUNDS_WITHDRAWN": "Personal Funds Withdrawn",
    "OPENING_BALANCE": "Opening Balance",
    "BALANCE_ADJUSTMENT": "Balance Adjustment",
    "SECURITY_DEPOSIT": "Security Deposit",
    "SECURITY_DEPOSIT_RETURN": "Security Deposit Return",
    "ESCROW_DEPOSIT": "Escrow Deposit",
    "ESCROW_RELEASE": "Escrow Release",
}

# Keys the AI prompt advertises that fold into an existing category.
CATEGORY_ALIASES: dict[str, str] = {
    "RENT_LEASE_EQUIPMENT": "RENT_LEASE_VEHICLES",
    "RENT_LEASE_PROPERTY": "RENT_LEASE_OTHER",
    "MEALS_ENTERTAINMENT": "MEALS",
}

# Category keys offered to the AI classifier.
AI_CATEGORY_KEYS: list[str] = [
    "ADVERTISING",
    "CAR_TRUCK_EXPENSES",
    "COMMISSIONS_FEES",
    "CONTRACT_LABOR",
    "DEPLETION",
    "DEPRECIATION",
    "EMPLOYEE_BENEFIT_PROGRAMS",
    "INSURANCE_OTHER",
    "INTEREST_MORTGAGE",
    "INTEREST_OTHER",
    "LEGAL_PROFESSIONAL",
    "OFFICE_EXPENSES",
    "PENSION_PROFIT_SHARING",
    "RENT_LEASE_VEHICLES",
    "RENT_LEASE_EQUIPMENT",
    "RENT_LEASE_PROPERTY",
    "REPAIRS_MAINTENANCE",
    "SUPPLIES",
    "TAXES_LICENSES",
    "TRAVEL",
    "MEALS",
    "UTILITIES",
    "WAGES",
    "OTHER_EXPENSES",
    "GROSS_RECEIPTS",
    "RETURNS_ALLOWANCES",
    "OTHER_INCOME",
    "COST_OF_GOODS_SOLD",
    "PERSONAL_EXPENSE",
    "PERSONAL_TRANSFER",
    "OWNER_DRAWS",
    "OWNER_CONTRIBUTION",
    "TRANSFER_BETWEEN_ACCOUNTS",
    "MATERIALS_SUPPLIES",
    "SOFTWARE_SUBSCRIPTIONS",
    "WEB_HOSTING",
    "BANK_FEES",
    "TRAINING_EDUCATION",
    "DUES_MEMBERSHIPS",
    "TOOLS_EQUIPMENT",
]

INCOME_CATEGORY_KEYS: frozenset[str] = frozenset({
    "INCOME",
    "GROSS_RECEIPTS",
    "RENTAL_INCOME",
    "INTEREST_INCOME",
    "DIVIDEND_INCOME",
    "CAPITAL_GAINS",
    "OTHER_INCOME",
    "OWNER_CONTRIBUTION",
})

INCOME_CATEGORY_VALUES: frozenset[str] = frozenset({
    CATEGORIES["GROSS_RECEIPTS"],
    CATEGORIES["OTHER_INCOME"],
    CATEGORIES["OWNER_CONTRIBUTION"],
})

NEUTRAL_CATEGORY_VALUES: frozenset[str] = frozenset({
    CATEGORIES["OWNER_CONTRIBUTION"],
    CATEGORIES["TRANSFER_BETWEEN_ACCOUNTS"],
    CATEGORIES["LOAN_RECEIVED"],
    CATEGORIES["LOAN_PAYMENT"],
    CATEGORIES["REFUND_RECEIVED"],
    CATEGORIES["REFUND_ISSUED"],
    CATEGORIES["SECURITY_DEPOSIT"],
    CATEGORIES["SECURITY_DEPOSIT_RETURN"],
    CATEGORIES["ESCROW_DEPOSIT"],
    CATEGORIES["ESCROW_RELEASE"],
    CATEGORIES["CREDIT_CARD_PAYMENT"],
    CATEGORIES["SALES_TAX_COLLECTED"],
    CATEGORIES["SALES_TAX_PAYMENT"],
    CATEGORIES["PAYROLL_TAX_DEPOSIT"],
    CATEGORIES["REIMBURSEMENT_RECEIVED"],
    CATEGORIES["REIMBURSEMENT_PAID"],
    CATEGORIES["PERSONAL_FUNDS_ADDED"],
    CATEGORIES["PERSONAL_FUNDS_WITHDRAWN"],
    CATEGORIES["OPENING_BALANCE"],
    CATEGORIES["BALANCE_ADJUSTMENT"],
})

_VALUES_LOWER: dict[str, str] = {value.lower(): value for value in CATEGORIES.values()}


def get_category_value(key: str) -> str:
    """Return the display value for a category key (unknown keys pass through)."""
    key = CATEGORY_ALIASES.get(key, key)
    return CATEGORIES.get(key, key)


def resolve_category(category: str | None) -> str | None:
    """Map a key or display value to the canonical display value.

    Returns None when the category is not part of the catalogue.
    """
    if not category:
        return None
    candidate = category.strip()
    key = candidate.upper().replace(" ", "_")
    key = CATEGORY_ALIASES.get(key, key)
    if key in CATEGORIES:
        return CATEGORIES[key]
    return _VALUES_LOWER.get(candidate.lower())


def is_income_category(category: str) -> bool:
    return category in INCOME_CATEGORY_KEYS or category in INCOME_CATEGORY_VALUES


def is_neutral_category(category: str) -> bool:
    return category in NEUTRAL_CATEGORY_VALUES
