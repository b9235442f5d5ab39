"""
Application constants to replace magic numbers throughout the codebase.
"""

# Signal enums
DIRECTIONS = ('call', 'put')
SIGNAL_STATUSES = ('pending', 'active', 'closed', 'expired')
SIGNAL_RESULTS = ('win', 'loss', 'break_even', 'pending')
MONITORED_FLAGS = ('yes', 'no')

# Signal defaults
DEFAULT_TIMEFRAME = '1M'
DEFAULT_STATUS = 'pending'
DEFAULT_RESULT = 'pending'

# Notification
HIGH_CONFIDENCE_THRESHOLD = 70.0

# Numeric fields of a signal held as Decimal
SIGNAL_DECIMAL_FIELDS = (
    'entry_price',
    'confidence',
    'strength',
    'ema_9',
    'ema_20',
    'ema_50',
    'rsi',
    'adx',
    'bb_upper',
    'bb_middle',
    'bb_lower',
    'volume_ratio',
    'pattern_strength',
)

# Structured fields stored as JSON text
SIGNAL_JSON_FIELDS = ('reasons', 'filters', 'support_levels', 'resistance_levels')

# Database query limits
DEFAULT_QUERY_LIMIT = 50
MAX_QUERY_LIMIT = 500

# Export
EXPORT_TIMESTAMP_FORMAT = '%d/%m/%Y %H:%M:%S'
EXPORT_COLUMNS = [
    'Timestamp',
    'Asset',
    'Direction',
    'Price',
    'Confidence',
    'Strength',
    'Status',
    'Result',
]
