"""
Configuration: canonical schema, cleaning thresholds, quarter labels and
sample-data catalogs.
"""

# ---------------------------------------------------------------------------
# Canonical record schema
# ---------------------------------------------------------------------------
SALES_COLUMNS = [
    "id",
    "date",
    "product",
    "category",
    "region",
    "customer_type",
    "quantity",
    "unit_price",
    "total_sales",
]

CATEGORICAL_FIELDS = ["product", "category", "region", "customer_type"]
NUMERIC_FIELDS = ["quantity", "unit_price"]

# Header aliases accepted on import, matched after name normalization
COLUMN_ALIASES: dict[str, list[str]] = {
    "id": ["record_id", "sale_id", "order_id"],
    "date": ["order_date", "sale_date", "created_at"],
    "product": ["item", "sku", "product_name"],
    "category": ["product_category"],
    "region": ["state", "territory", "market"],
    "customer_type": ["customertype", "customer_segment", "segment"],
    "quantity": ["qty", "units"],
    "unit_price": ["unitprice", "price"],
    "total_sales": ["totalsales", "total", "revenue", "amount"],
}

# ---------------------------------------------------------------------------
# Cleaning
# ---------------------------------------------------------------------------
# Values further than this many population standard deviations from the
# dataset mean are replaced by the mean.
OUTLIER_STD_THRESHOLD = 3.0

# ---------------------------------------------------------------------------
# Calendar buckets
# ---------------------------------------------------------------------------
QUARTERS = ["Q1", "Q2", "Q3", "Q4"]

# ---------------------------------------------------------------------------
# Record ids
# ---------------------------------------------------------------------------
RECORD_ID_PREFIX = "SALE-"
RECORD_ID_OFFSET = 1000

# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------
SAMPLE_PRODUCTS = [
    "Laptop Pro",
    "Smartphone X",
    "Tablet Ultra",
    "Desktop Workstation",
    "Gaming Console",
    "Wireless Earbuds",
    "Smart Watch",
    "Camera 4K",
    "Portable Speaker",
    'Monitor 27"',
]
SAMPLE_CATEGORIES = ["Electronics", "Computing", "Mobile", "Gaming", "Accessories"]
SAMPLE_REGIONS = ["North America", "Europe", "Asia Pacific", "Latin America", "Middle East"]
SAMPLE_CUSTOMER_TYPES = ["Individual", "Small Business", "Corporate", "Education", "Government"]

SAMPLE_START_DATE = "2020-01-01"
SAMPLE_END_DATE = "2023-12-31"
SAMPLE_QUANTITY_RANGE = (1, 20)
SAMPLE_UNIT_PRICE_RANGE = (100, 1099)
ANOMALY_QUANTITY_RANGE = (500, 1499)
