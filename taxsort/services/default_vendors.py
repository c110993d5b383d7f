"""Built-in vendor knowledge.

``DEFAULT_VENDORS`` maps an upper-case description pattern to a category key,
an optional subcategory and a display vendor name. It is the fallback used
before a user has built rules of their own.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class VendorEntry:
    category: str  # category key, see categories.CATEGORIES
    subcategory: str | None
    vendor: str


DEFAULT_VENDORS: dict[str, VendorEntry] = {
    # Gas stations
    "SHELL": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Shell"),
    "CHEVRON": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Chevron"),
    "EXXON": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Exxon"),
    "EXXONMOBIL": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "ExxonMobil"),
    "MOBIL": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Mobil"),
    "BP": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "BP"),
    "SPEEDWAY": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Speedway"),
    "MARATHON": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Marathon"),
    "CIRCLE K": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Circle K"),
    "RACETRAC": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "RaceTrac"),
    "WAWA": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Wawa"),
    "SHEETZ": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Sheetz"),
    "PILOT": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Pilot"),
    "LOVES": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Love's"),
    "LOVE'S": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Love's"),
    "SUNOCO": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Sunoco"),
    "VALERO": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Valero"),
    "CITGO": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Citgo"),
    "TEXACO": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Texaco"),
    "CUMBERLAND": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Cumberland Farms"),
    "QT": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "QuikTrip"),
    "QUIKTRIP": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "QuikTrip"),
    "KWIK TRIP": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "Kwik Trip"),
    "7-ELEVEN": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "7-Eleven"),
    "7 ELEVEN": VendorEntry("CAR_TRUCK_EXPENSES", "Fuel/Gas", "7-Eleven"),
  
    # Auto parts, service and vehicle rental
    "AUTOZONE": VendorEntry("CAR_TRUCK_EXPENSES", "Tires and Parts", "AutoZone"),
    "ADVANCE AUTO": VendorEntry("CAR_TRUCK_EXPENSES", "Tires and Parts", "Advance Auto Parts"),
    "OREILLY": VendorEntry("CAR_TRUCK_EXPENSES", "Tires and Parts", "O'Reilly Auto Parts"),
    "O'REILLY": VendorEntry("CAR_TRUCK_EXPENSES", "Tires and Parts", "O'Reilly Auto Parts"),
    "NAPA": VendorEntry("CAR_TRUCK_EXPENSES", "Tires and Parts", "NAPA"),
    "DISCOUNT TIRE": VendorEntry("CAR_TRUCK_EXPENSES", "Tires and Parts", "Discount Tire"),
    "FIRESTONE": VendorEntry("CAR_TRUCK_EXPENSES", "Repairs & Maintenance", "Firestone"),
    "GOODYEAR": VendorEntry("CAR_TRUCK_EXPENSES", "Tires and Parts", "Goodyear"),
    "JIFFY LUBE": VendorEntry("CAR_TRUCK_EXPENSES", "Repairs & Maintenance", "Jiffy Lube"),
    "VALVOLINE": VendorEntry("CAR_TRUCK_EXPENSES", "Repairs & Maintenance", "Valvoline"),
    "MIDAS": VendorEntry("CAR_TRUCK_EXPENSES", "Repairs & Maintenance", "Midas"),
    "PENSKE": VendorEntry("RENT_LEASE_VEHICLES", None, "Penske"),
    "UHAUL": VendorEntry("RENT_LEASE_VEHICLES", None, "U-Haul"),
    "U-HAUL": VendorEntry("RENT_LEASE_VEHICLES", None, "U-Haul"),
    "ENTERPRISE": VendorEntry("RENT_LEASE_VEHICLES", None, "Enterprise"),
    "HERTZ": VendorEntry("RENT_LEASE_VEHICLES", None, "Hertz"),
    "BUDGET RENT": VendorEntry("RENT_LEASE_VEHICLES", None, "Budget"),

    # Building materials
    "HOME DEPOT": VendorEntry("MATERIALS_SUPPLIES", "Manufacturing Materials", "Home Depot"),
    "HOMEDEPOT": VendorEntry("MATERIALS_SUPPLIES", "Manufacturing Materials", "Home Depot"),
    "LOWES": VendorEntry("MATERIALS_SUPPLIES", "Manufacturing Materials", "Lowe's"),
    "LOWE'S": VendorEntry("MATERIALS_SUPPLIES", "Manufacturing Materials", "Lowe's"),
    "MENARDS": VendorEntry("MATERIALS_SUPPLIES", "Manufacturing Materials", "Menards"),
    "84 LUMBER": VendorEntry("MATERIALS_SUPPLIES", "Manufacturing Materials", "84 Lumber"),
    "ACE HARDWARE": VendorEntry("MATERIALS_SUPPLIES", "Manufacturing Materials", "Ace Hardware"),
    "TRUE VALUE": VendorEntry("MATERIALS_SUPPLIES", "Manufacturing Materials", "True Value"),
    "HARBOR FREIGHT": VendorEntry("TOOLS_EQUIPMENT", None, "Harbor Freight"),
    "NORTHERN TOOL": VendorEntry("TOOLS_EQUIPMENT", None, "Northern Tool"),
    "FASTENAL": VendorEntry("MATERIALS_SUPPLIES", "Manufacturing Materials", "Fastenal"),
    "GRAINGER": VendorEntry("MATERIALS_SUPPLIES", "Manufacturing Materials", "Grainger"),
    "FERGUSON": VendorEntry("MATERIALS_SUPPLIES", "Manufacturing Materials", "Ferguson"),
    "FLOOR & DECOR": VendorEntry("MATERIALS_SUPPLIES", "Manufacturing Materials", "Floor & Decor"),
    "SHERWIN": VendorEntry("MATERIALS_SUPPLIES", "Manufacturing Materials", "Sherwin-Williams"),
    "BENJAMIN MOORE": VendorEntry("MATERIALS_SUPPLIES", "Manufacturing Materials", "Benjamin Moore"),
  
    # Office supplies
    "STAPLES": VendorEntry("OFFICE_EXPENSES", "Small Equipment (< $2,500)", "Staples"),
    "OFFICE DEPOT": VendorEntry("OFFICE_EXPENSES", "Small Equipment (< $2,500)", "Office Depot"),
    "OFFICEMAX": VendorEntry("OFFICE_EXPENSES", "Small Equipment (< $2,500)", "OfficeMax"),
    "OFFICE MAX": VendorEntry("OFFICE_EXPENSES", "Small Equipment (< $2,500)", "OfficeMax"),
    "FED EX OFFICE": VendorEntry("OFFICE_EXPENSES", "Printer Paper & Ink", "FedEx Office"),
    "FEDEX OFFICE": VendorEntry("OFFICE_EXPENSES", "Printer Paper & Ink", "FedEx Office"),
  
    # Software and SaaS
    "ADOBE": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Adobe"),
    "MICROSOFT": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Microsoft"),
    "MSFT": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Microsoft"),
    "GOOGLE": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Google"),
    "DROPBOX": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Dropbox"),
    "ZOOM": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Zoom"),
    "SLACK": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Slack"),
    "GITHUB": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "GitHub"),
    "ATLASSIAN": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Atlassian"),
    "JIRA": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Atlassian"),
    "SALESFORCE": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Salesforce"),
    "HUBSPOT": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "HubSpot"),
    "QUICKBOOKS": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "QuickBooks"),
    "INTUIT": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Intuit"),
    "CANVA": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Canva"),
    "MAILCHIMP": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Mailchimp"),
    "CONSTANT CONTACT": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Constant Contact"),
    "DOCUSIGN": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "DocuSign"),
    "NOTION": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Notion"),
    "ASANA": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Asana"),
    "MONDAY.COM": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Monday.com"),
    "CALENDLY": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Calendly"),
    "GRAMMARLY": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Grammarly"),
    "CHATGPT": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "OpenAI"),
    "OPENAI": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "OpenAI"),
    "APPLE.COM": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Apple"),
    "SPOTIFY": VendorEntry("SOFTWARE_SUBSCRIPTIONS", None, "Spotify"),
  
    # Hosting and domains
    "GODADDY": VendorEntry("WEB_HOSTING", None, "GoDaddy"),
    "NAMECHEAP": VendorEntry("WEB_HOSTING", None, "Namecheap"),
    "BLUEHOST": VendorEntry("WEB_HOSTING", None, "Bluehost"),
    "HOSTGATOR": VendorEntry("WEB_HOSTING", None, "HostGator"),
    "SITEGROUND": VendorEntry("WEB_HOSTING", None, "SiteGround"),
    "CLOUDFLARE": VendorEntry("WEB_HOSTING", None, "Cloudflare"),
    "AWS": VendorEntry("WEB_HOSTING", None, "Amazon Web Services"),
    "AMAZON WEB": VendorEntry("WEB_HOSTING", None, "Amazon Web Services"),
    "DIGITALOCEAN": VendorEntry("WEB_HOSTING", None, "DigitalOcean"),
    "HEROKU": VendorEntry("WEB_HOSTING", None, "Heroku"),
    "VERCEL": VendorEntry("WEB_HOSTING", None, "Vercel"),
    "NETLIFY": VendorEntry("WEB_HOSTING", None, "Netlify"),
    "FIREBASE": VendorEntry("WEB_HOSTING", None, "Firebase"),
    "RENDER": VendorEntry("WEB_HOSTING", None, "Render"),
    "SQUARESPACE": VendorEntry("WEB_HOSTING", None, "Squarespace"),
    "WIX": VendorEntry("WEB_HOSTING", None, "Wix"),
    "WORDPRESS": VendorEntry("WEB_HOSTING", None, "WordPress"),
    "SHOPIFY": VendorEntry("WEB_HOSTING", None, "Shopify"),
  
    # Utilities
    "FPL": VendorEntry("UTILITIES", None, "Florida Power & Light"),
    "DUKE ENERGY": VendorEntry("UTILITIES", None, "Duke Energy"),
    "GEORGIA POWER": VendorEntry("UTILITIES", None, "Georgia Power"),
    "CONEDISON": VendorEntry("UTILITIES", None, "Con Edison"),
    "CON EDISON": VendorEntry("UTILITIES", None, "Con Edison"),
    "PG&E": VendorEntry("UTILITIES", None, "PG&E"),
    "PACIFIC GAS": VendorEntry("UTILITIES", None, "PG&E"),
    "SOUTHERN CALIFORNIA EDISON": VendorEntry("UTILITIES", None, "SCE"),
    "AT&T": VendorEntry("UTILITIES", None, "AT&T"),
    "ATT": VendorEntry("UTILITIES", None, "AT&T"),
    "VERIZON": VendorEntry("UTILITIES", None, "Verizon"),
    "VZWRLSS": VendorEntry("UTILITIES", None, "Verizon"),
    "T-MOBILE": VendorEntry("UTILITIES", None, "T-Mobile"),
    "TMOBILE": VendorEntry("UTILITIES", None, "T-Mobile"),
    "COMCAST": VendorEntry("UTILITIES", None, "Comcast"),
    "XFINITY": VendorEntry("UTILITIES", None, "Xfinity"),
    "SPECTRUM": VendorEntry("UTILITIES", None, "Spectrum"),
    "COX COMM": VendorEntry("UTILITIES", None, "Cox"),
    "CENTURYLINK": VendorEntry("UTILITIES", None, "CenturyLink"),
    "WATER DEPT": VendorEntry("UTILITIES", None, "Water Department"),
    "CITY OF": VendorEntry("UTILITIES", None, "City Utilities"),
  
    # Insurance
    "GEICO": VendorEntry("INSURANCE_OTHER", "Commercial Auto (if not Line 9)", "GEICO"),
    "STATE FARM": VendorEntry("INSURANCE_OTHER", None, "State Farm"),
    "PROGRESSIVE": VendorEntry("INSURANCE_OTHER", None, "Progressive"),
    "ALLSTATE": VendorEntry("INSURANCE_OTHER", None, "Allstate"),
    "LIBERTY MUTUAL": VendorEntry("INSURANCE_OTHER", None, "Liberty Mutual"),
    "NATIONWIDE": VendorEntry("INSURANCE_OTHER", None, "Nationwide"),
    "FARMERS": VendorEntry("INSURANCE_OTHER", None, "Farmers"),
    "USAA": VendorEntry("INSURANCE_OTHER", None, "USAA"),
    "TRAVELERS": VendorEntry("INSURANCE_OTHER", None, "Travelers"),
    "HARTFORD": VendorEntry("INSURANCE_OTHER", None, "The Hartford"),
    "CIGNA": VendorEntry("EMPLOYEE_BENEFIT_PROGRAMS", "Health Insurance", "Cigna"),
    "AETNA": VendorEntry("EMPLOYEE_BENEFIT_PROGRAMS", "Health Insurance", "Aetna"),
    "BLUE CROSS": VendorEntry("EMPLOYEE_BENEFIT_PROGRAMS", "Health Insurance", "Blue Cross"),
    "UNITED HEALTH": VendorEntry("EMPLOYEE_BENEFIT_PROGRAMS", "Health Insurance", "United Healthcare"),
  
    # Shipping and postage
    "USPS": VendorEntry("OTHER_COSTS", "Shipping to Customer", "USPS"),
    "UPS": VendorEntry("OTHER_COSTS", "Shipping to Customer", "UPS"),
    "FEDEX": VendorEntry("OTHER_COSTS", "Shipping to Customer", "FedEx"),
    "FED EX": VendorEntry("OTHER_COSTS", "Shipping to Customer", "FedEx"),
    "DHL": VendorEntry("OTHER_COSTS", "Shipping to Customer", "DHL"),
    "STAMPS.COM": VendorEntry("OTHER_COSTS", "Shipping to Customer", "Stamps.com"),
    "PIRATESHIP": VendorEntry("OTHER_COSTS", "Shipping to Customer", "Pirate Ship"),
    "SHIPSTATION": VendorEntry("OTHER_COSTS", "Shipping to Customer", "ShipStation"),
  
    # Banking
    "CHASE": VendorEntry("BANK_FEES", None, "Chase"),
    "BANK OF AMERICA": VendorEntry("BANK_FEES", None, "Bank of America"),
    "WELLS FARGO": VendorEntry("BANK_FEES", None, "Wells Fargo"),
    "CITI": VendorEntry("BANK_FEES", None, "Citi"),
    "CITIBANK": VendorEntry("BANK_FEES", None, "Citi"),
    "PNC": VendorEntry("BANK_FEES", None, "PNC"),
    "US BANK": VendorEntry("BANK_FEES", None, "US Bank"),
    "CAPITAL ONE": VendorEntry("BANK_FEES", None, "Capital One"),
    "TD BANK": VendorEntry("BANK_FEES", None, "TD Bank"),
    "TRUIST": VendorEntry("BANK_FEES", None, "Truist"),
    "REGIONS": VendorEntry("BANK_FEES", None, "Regions"),
    "SUNTRUST": VendorEntry("BANK_FEES", None, "SunTrust"),
    "INTEREST CHARGE": VendorEntry("INTEREST_OTHER", "Credit Card Interest", "Interest Charge"),
    "FINANCE CHARGE": VendorEntry("INTEREST_OTHER", "Credit Card Interest", "Finance Charge"),
    "MONTHLY SERVICE FEE": VendorEntry("BANK_FEES", None, "Bank Fee"),
    "OVERDRAFT FEE": VendorEntry("BANK_FEES", None, "Bank Fee"),
    "ATM FEE": VendorEntry("BANK_FEES", None, "Bank Fee"),
    "WIRE FEE": VendorEntry("BANK_FEES", None, "Bank Fee"),
  
    # Payment processors
    "PAYPAL": VendorEntry("COMMISSIONS_FEES", None, "PayPal"),
    "STRIPE": VendorEntry("COMMISSIONS_FEES", None, "Stripe"),
    "SQUARE": VendorEntry("COMMISSIONS_FEES", None, "Square"),
    "VENMO": VendorEntry("COMMISSIONS_FEES", None, "Venmo"),
    "BRAINTREE": VendorEntry("COMMISSIONS_FEES", None, "Braintree"),
    "AUTHORIZE.NET": VendorEntry("COMMISSIONS_FEES", None, "Authorize.net"),
    "CLOVER": VendorEntry("COMMISSIONS_FEES", None, "Clover"),
    "TOAST": VendorEntry("COMMISSIONS_FEES", None, "Toast"),
  
    # Advertising
    "GOOGLE ADS": VendorEntry("ADVERTISING", "Online Ads (Google, Facebook, etc.)", "Google Ads"),
    "GOOGLE AD": VendorEntry("ADVERTISING", "Online Ads (Google, Facebook, etc.)", "Google Ads"),
    "FACEBOOK ADS": VendorEntry("ADVERTISING", "Online Ads (Google, Facebook, etc.)", "Facebook/Meta"),
    "FB ADS": VendorEntry("ADVERTISING", "Online Ads (Google, Facebook, etc.)", "Facebook/Meta"),
    "FACEBOOK": VendorEntry("ADVERTISING", "Online Ads (Google, Facebook, etc.)", "Facebook/Meta"),
    "META ADS": VendorEntry("ADVERTISING", "Online Ads (Google, Facebook, etc.)", "Facebook/Meta"),
    "META": VendorEntry("ADVERTISING", "Online Ads (Google, Facebook, etc.)", "Facebook/Meta"),
    "INSTAGRAM": VendorEntry("ADVERTISING", "Online Ads (Google, Facebook, etc.)", "Instagram"),
    "LINKEDIN ADS": VendorEntry("ADVERTISING", "Online Ads (Google, Facebook, etc.)", "LinkedIn"),
    "LINKEDIN": VendorEntry("ADVERTISING", "Online Ads (Google, Facebook, etc.)", "LinkedIn"),
    "YELP": VendorEntry("ADVERTISING", "Directory Listings", "Yelp"),
    "YELLOW PAGES": VendorEntry("ADVERTISING", "Directory Listings", "Yellow Pages"),
    "VISTAPRINT": VendorEntry("ADVERTISING", "Business Cards", "VistaPrint"),
    "MOOCOM": VendorEntry("ADVERTISING", "Business Cards", "Moo"),
    "MOO.COM": VendorEntry("ADVERTISING", "Business Cards", "Moo"),
    "TWITTER": VendorEntry("ADVERTISING", "Online Ads (Google, Facebook, etc.)", "Twitter/X"),
    "TIKTOK": VendorEntry("ADVERTISING", "Online Ads (Google, Facebook, etc.)", "TikTok"),
  
    # Meals
    "MCDONALDS": VendorEntry("MEALS", None, "McDonald's"),
    "MCDONALD'S": VendorEntry("MEALS", None, "McDonald's"),
    "STARBUCKS": VendorEntry("MEALS", None, "Starbucks"),
    "CHIPOTLE": VendorEntry("MEALS", None, "Chipotle"),
    "SUBWAY": VendorEntry("MEALS", None, "Subway"),
    "DUNKIN": VendorEntry("MEALS", None, "Dunkin'"),
    "BURGER KING": VendorEntry("MEALS", None, "Burger King"),
    "WENDYS": VendorEntry("MEALS", None, "Wendy's"),
    "WENDY'S": VendorEntry("MEALS", None, "Wendy's"),
    "TACO BELL": VendorEntry("MEALS", None, "Taco Bell"),
    "CHICK-FIL-A": VendorEntry("MEALS", None, "Chick-fil-A"),
    "CHICKFILA": VendorEntry("MEALS", None, "Chick-fil-A"),
    "CHILIS": VendorEntry("MEALS", None, "Chili's"),
    "CHILI'S": VendorEntry("MEALS", None, "Chili's"),
    "APPLEBEES": VendorEntry("MEALS", None, "Applebee's"),
    "APPLEBEE'S": VendorEntry("MEALS", None, "Applebee's"),
    "OLIVE GARDEN": VendorEntry("MEALS", None, "Olive Garden"),
    "PANERA": VendorEntry("MEALS", None, "Panera"),
    "PANDA EXPRESS": VendorEntry("MEALS", None, "Panda Express"),
    "FIVE GUYS": VendorEntry("MEALS", None, "Five Guys"),
    "POPEYES": VendorEntry("MEALS", None, "Popeyes"),
    "KFC": VendorEntry("MEALS", None, "KFC"),
    "DOMINOS": VendorEntry("MEALS", None, "Domino's"),
    "DOMINO'S": VendorEntry("MEALS", None, "Domino's"),
    "PIZZA HUT": VendorEntry("MEALS", None, "Pizza Hut"),
    "PAPA JOHN'S": VendorEntry("MEALS", None, "Papa John's"),
    "PAPA JOHNS": VendorEntry("MEALS", None, "Papa John's"),
    "DOORDASH": VendorEntry("MEALS", None, "DoorDash"),
    "GRUBHUB": VendorEntry("MEALS", None, "Grubhub"),
    "UBER EATS": VendorEntry("MEALS", None, "Uber Eats"),
    "UBEREATS": VendorEntry("MEALS", None, "Uber Eats"),
    "POSTMATES": VendorEntry("MEALS", None, "Postmates"),
    "TST*": VendorEntry("MEALS", None, "Restaurant (Toast)"),
    "SQ *": VendorEntry("MEALS", None, "Restaurant (Square)"),
  
    # Travel
    "UBER": VendorEntry("TRAVEL", None, "Uber"),
    "LYFT": VendorEntry("TRAVEL", None, "Lyft"),
    "DELTA": VendorEntry("TRAVEL", None, "Delta Airlines"),
    "AMERICAN AIRLINES": VendorEntry("TRAVEL", None, "American Airlines"),
    "UNITED AIRLINES": VendorEntry("TRAVEL", None, "United Airlines"),
    "SOUTHWEST": VendorEntry("TRAVEL", None, "Southwest Airlines"),
    "JETBLUE": VendorEntry("TRAVEL", None, "JetBlue"),
    "SPIRIT": VendorEntry("TRAVEL", None, "Spirit Airlines"),
    "FRONTIER": VendorEntry("TRAVEL", None, "Frontier Airlines"),
    "MARRIOTT": VendorEntry("TRAVEL", None, "Marriott"),
    "HILTON": VendorEntry("TRAVEL", None, "Hilton"),
    "HYATT": VendorEntry("TRAVEL", None, "Hyatt"),
    "IHG": VendorEntry("TRAVEL", None, "IHG"),
    "HOLIDAY INN": VendorEntry("TRAVEL", None, "Holiday Inn"),
    "HAMPTON INN": VendorEntry("TRAVEL", None, "Hampton Inn"),
    "BEST WESTERN": VendorEntry("TRAVEL", None, "Best Western"),
    "AIRBNB": VendorEntry("TRAVEL", None, "Airbnb"),
    "VRBO": VendorEntry("TRAVEL", None, "VRBO"),
    "EXPEDIA": VendorEntry("TRAVEL", None, "Expedia"),
    "BOOKING.COM": VendorEntry("TRAVEL", None, "Booking.com"),
    "HOTELS.COM": VendorEntry("TRAVEL", None, "Hotels.com"),
    "KAYAK": VendorEntry("TRAVEL", None, "Kayak"),
    "PARKING": VendorEntry("CAR_TRUCK_EXPENSES", "Parking & Tolls", "Parking"),
    "TOLL": VendorEntry("CAR_TRUCK_EXPENSES", "Parking & Tolls", "Toll"),
    "SUNPASS": VendorEntry("CAR_TRUCK_EXPENSES", "Parking & Tolls", "SunPass"),
    "E-PASS": VendorEntry("CAR_TRUCK_EXPENSES", "Parking & Tolls", "E-Pass"),
    "EPASS": VendorEntry("CAR_TRUCK_EXPENSES", "Parking & Tolls", "E-Pass"),
    "EZPASS": VendorEntry("CAR_TRUCK_EXPENSES", "Parking & Tolls", "EZPass"),
    "E-ZPASS": VendorEntry("CAR_TRUCK_EXPENSES", "Parking & Tolls", "EZPass"),
  
    # Legal and professional
    "LEGALZOOM": VendorEntry("LEGAL_PROFESSIONAL", "Business Registration/Filing Fees", "LegalZoom"),
    "ROCKET LAWYER": VendorEntry("LEGAL_PROFESSIONAL", "Legal Fees", "Rocket Lawyer"),
    "NOLO": VendorEntry("LEGAL_PROFESSIONAL", "Legal Fees", "Nolo"),
    "INC FILE": VendorEntry("LEGAL_PROFESSIONAL", "Business Registration/Filing Fees", "IncFile"),
    "NORTHWEST REGISTERED": VendorEntry("LEGAL_PROFESSIONAL", "Business Registration/Filing Fees", "Northwest Registered Agent"),
    "H&R BLOCK": VendorEntry("LEGAL_PROFESSIONAL", "Accounting & Tax Prep", "H&R Block"),
    "TURBOTAX": VendorEntry("LEGAL_PROFESSIONAL", "Accounting & Tax Prep", "TurboTax"),
    "TAXACT": VendorEntry("LEGAL_PROFESSIONAL", "Accounting & Tax Prep", "TaxAct"),
  
    # Dues and memberships
    "COSTCO": VendorEntry("DUES_MEMBERSHIPS", None, "Costco"),
    "SAMS CLUB": VendorEntry("DUES_MEMBERSHIPS", None, "Sam's Club"),
    "SAM'S CLUB": VendorEntry("DUES_MEMBERSHIPS", None, "Sam's Club"),
    "BJS": VendorEntry("DUES_MEMBERSHIPS", None, "BJ's"),
    "BJ'S": VendorEntry("DUES_MEMBERSHIPS", None, "BJ's"),
    "AMAZON PRIME": VendorEntry("DUES_MEMBERSHIPS", None, "Amazon Prime"),
  
    # Training
    "UDEMY": VendorEntry("TRAINING_EDUCATION", None, "Udemy"),
    "COURSERA": VendorEntry("TRAINING_EDUCATION", None, "Coursera"),
    "LINKEDIN LEARNING": VendorEntry("TRAINING_EDUCATION", None, "LinkedIn Learning"),
    "SKILLSHARE": VendorEntry("TRAINING_EDUCATION", None, "Skillshare"),
    "MASTERCLASS": VendorEntry("TRAINING_EDUCATION", None, "MasterClass"),
    "PLURALSIGHT": VendorEntry("TRAINING_EDUCATION", None, "Pluralsight"),
  
    # General retail, refine per user
    "AMAZON": VendorEntry("SUPPLIES", None, "Amazon"),
    "AMZN": VendorEntry("SUPPLIES", None, "Amazon"),
    "WALMART": VendorEntry("SUPPLIES", None, "Walmart"),
    "TARGET": VendorEntry("SUPPLIES", None, "Target"),
    "BEST BUY": VendorEntry("SUPPLIES", None, "Best Buy"),
    "BESTBUY": VendorEntry("SUPPLIES", None, "Best Buy"),
    "IKEA": VendorEntry("OFFICE_EXPENSES", "Office Décor", "IKEA"),
  
    # Personal and owner draws
    "ATM WITHDRAWAL": VendorEntry("OWNER_DRAWS", None, "ATM Withdrawal"),
    "ATM CASH": VendorEntry("OWNER_DRAWS", None, "ATM Withdrawal"),
    "CASH WITHDRAWAL": VendorEntry("OWNER_DRAWS", None, "Cash Withdrawal"),
    "ZELLE": VendorEntry("PERSONAL_TRANSFER", None, "Zelle"),
    "TRANSFER TO": VendorEntry("PERSONAL_TRANSFER", None, "Transfer"),
    "TRANSFER FROM": VendorEntry("PERSONAL_TRANSFER", None, "Transfer"),
    "NETFLIX": VendorEntry("PERSONAL_EXPENSE", None, "Netflix"),
    "HULU": VendorEntry("PERSONAL_EXPENSE", None, "Hulu"),
    "DISNEY+": VendorEntry("PERSONAL_EXPENSE", None, "Disney+"),
    "HBO": VendorEntry("PERSONAL_EXPENSE", None, "HBO Max"),
    "PARAMOUNT": VendorEntry("PERSONAL_EXPENSE", None, "Paramount+"),
    "PEACOCK": VendorEntry("PERSONAL_EXPENSE", None, "Peacock"),
    "GYM": VendorEntry("PERSONAL_EXPENSE", None, "Gym"),
    "FITNESS": VendorEntry("PERSONAL_EXPENSE", None, "Fitness"),
    "PLANET FITNESS": VendorEntry("PERSONAL_EXPENSE", None, "Planet Fitness"),
    "LA FITNESS": VendorEntry("PERSONAL_EXPENSE", None, "LA Fitness"),
}

# Noise at the start of bank descriptions. Matched longest-first.
TRANSACTION_PREFIXES: list[str] = [
    "CHECKCARD",
    "CHECK CARD",
    "DEBIT CARD",
    "POS PURCHASE",
    "POS DEBIT",
    "POS REFUND",
    "ACH DEBIT",
    "ACH CREDIT",
    "ACH WITHDRAWAL",
    "ACH DEPOSIT",
    "ELECTRONIC DEBIT",
    "ELECTRONIC CREDIT",
    "BILL PAY",
    "BILL PAYMENT",
    "ONLINE PAYMENT",
    "WEB PMNT",
    "INTERNET PMT",
    "AUTOPAY",
    "AUTO PAY",
    "RECURRING",
    "PREAUTHORIZED",
    "PRE-AUTHORIZED",
    "PURCHASE AUTHORIZED",
    "VISA",
    "MASTERCARD",
    "AMEX",
    "DISCOVER",
    "DEBIT",
    "CREDIT",
    "RETURN",
    "REFUND",
]

# Noise at the end of bank descriptions, applied in order.
TRANSACTION_SUFFIXES: list[re.Pattern[str]] = [
    re.compile(r"\d{2}/\d{2}$"),  # date: 01/15
    re.compile(r"\s+\d{4,}$"),  # trailing reference numbers
    re.compile(r"#\d+$"),  # store numbers: #1234
    re.compile(r"\s+[A-Z]{2}$"),  # state codes: FL, NY
    re.compile(r"\s+\d{5}(-\d{4})?$"),  # ZIP codes
    re.compile(r"\s+USA$", re.IGNORECASE),
    re.compile(r"\s+US$", re.IGNORECASE),
]

# Vendors whose category depends on what was bought. No rule is ever learned for them.
AMBIGUOUS_VENDORS: frozenset[str] = frozenset({
    # Gas stations (fuel vs. snacks)
    "WAWA", "SPEEDWAY", "SHEETZ", "SUNOCO", "SHELL", "CHEVRON", "EXXON", "MOBIL",
    "BP", "CITGO", "7-ELEVEN", "7 ELEVEN", "RACETRAC", "QUIKTRIP", "QT", "CIRCLE K",
    "CUMBERLAND FARMS", "KWIK TRIP", "LOVES", "PILOT", "FLYING J", "TA TRAVEL",
    "MARATHON", "VALERO", "PHILLIPS 66", "CONOCO", "ARCO", "CASEY", "CASEYS",
    # Big-box retail
    "WALMART", "WAL-MART", "TARGET", "COSTCO", "SAM'S CLUB", "SAMS CLUB", "BJ'S",
    "AMAZON", "AMZN",
})


@dataclass(frozen=True)
class GlobalRuleSeed:
    name: str
    pattern: str
    category: str  # display value
    subcategory: str | None
    confidence: float
    vote_count: int = 100


# System-owned global rules shared with every user who keeps global rules on.
GLOBAL_RULE_SEEDS: list[GlobalRuleSeed] = [
    GlobalRuleSeed("McDonald's", "MCDONALD", "Meals", "Fast Food", 0.95),
    GlobalRuleSeed("Burger King", "BURGER KING", "Meals", "Fast Food", 0.95),
    GlobalRuleSeed("Wendy's", "WENDY", "Meals", "Fast Food", 0.95),
    GlobalRuleSeed("Taco Bell", "TACO BELL", "Meals", "Fast Food", 0.95),
    GlobalRuleSeed("Chick-fil-A", "CHICK-FIL-A", "Meals", "Fast Food", 0.95),
    GlobalRuleSeed("Chipotle", "CHIPOTLE", "Meals", "Fast Food", 0.95),
    GlobalRuleSeed("Subway", "SUBWAY", "Meals", "Fast Food", 0.95),
    GlobalRuleSeed("KFC", "KFC", "Meals", "Fast Food", 0.95),
    GlobalRuleSeed("Popeyes", "POPEYE", "Meals", "Fast Food", 0.95),
    GlobalRuleSeed("Dunkin", "DUNKIN", "Meals", "Coffee/Snacks", 0.95),
    GlobalRuleSeed("Starbucks", "STARBUCKS", "Meals", "Coffee/Snacks", 0.95),
    GlobalRuleSeed("Panera", "PANERA", "Meals", "Fast Food", 0.95),
    GlobalRuleSeed("AutoZone", "AUTOZONE", "Car and Truck Expenses", "Parts/Maintenance", 0.95),
    GlobalRuleSeed("O'Reilly Auto", "O'REILLY", "Car and Truck Expenses", "Parts/Maintenance", 0.95),
    GlobalRuleSeed("Advance Auto", "ADVANCE AUTO", "Car and Truck Expenses", "Parts/Maintenance", 0.95),
    GlobalRuleSeed("NAPA Auto", "NAPA", "Car and Truck Expenses", "Parts/Maintenance", 0.95),
    GlobalRuleSeed("Home Depot", "HOME DEPOT", "Materials and Supplies", None, 0.85),
    GlobalRuleSeed("Lowe's", "LOWE'S", "Materials and Supplies", None, 0.85),
    GlobalRuleSeed("Menards", "MENARDS", "Materials and Supplies", None, 0.85),
    GlobalRuleSeed("Office Depot", "OFFICE DEPOT", "Office Expenses", None, 0.90),
    GlobalRuleSeed("Staples", "STAPLES", "Office Expenses", None, 0.90),
    GlobalRuleSeed("ATM Withdrawal", "ATM WITHDRAWAL", "Owner Draws/Distributions", None, 0.95),
    GlobalRuleSeed("ATM Cash Deposit", "ATM CASH DEPOSIT", "Owner Contribution/Capital", None, 0.95),
]
