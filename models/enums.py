from enum import Enum

class ValidationMode(str, Enum):
    PERMISSIVE = "permissive"
    STRICT = "strict"

# Constants
VAT_PRECISION = 4
MAX_DISCOUNT_PERCENTAGE = 100
