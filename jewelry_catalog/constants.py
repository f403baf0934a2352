# :::КАТЕГОРИИ:::
CATEGORY_NAME_MIN_LENGTH = 2
CATEGORY_NAME_MAX_LENGTH = 100
CATEGORY_DESCRIPTION_MAX_LENGTH = 500
CATEGORY_ROOT_LEVEL = 0

# :::ТОВАРЫ:::
PRODUCT_NAME_MIN_LENGTH = 2
PRODUCT_NAME_MAX_LENGTH = 200
PRODUCT_SHORT_DESCRIPTION_MAX_LENGTH = 100
PRODUCT_LONG_DESCRIPTION_MIN_LENGTH = 10
PRODUCT_LONG_DESCRIPTION_MAX_LENGTH = 5000
PRODUCT_MIN_PRICE = 0
PRODUCT_MIN_OFFER_PERCENTAGE = 0
PRODUCT_MAX_OFFER_PERCENTAGE = 100
PRODUCT_PRICE_DIGITS = 12
PRODUCT_PRICE_SCALE = 2
PRODUCT_ROUTER_MIN_PAGE = 1
PRODUCT_ROUTER_MIN_SIZE = 1
PRODUCT_ROUTER_MAX_SIZE = 100
PRODUCT_ROUTER_DEFAULT_SIZE = 20

# :::КЛИЕНТЫ:::
CUSTOMER_NAME_MIN_LENGTH = 2
CUSTOMER_NAME_MAX_LENGTH = 100
CUSTOMER_PHONE_MAX_LENGTH = 20

# :::КАТАЛОГИ:::
CATALOG_NAME_MIN_LENGTH = 2
CATALOG_NAME_MAX_LENGTH = 200
CATALOG_PASSWORD_MIN_LENGTH = 1

# :::ЗАПРОСЫ:::
INQUIRY_STATUS_PENDING = 'pending'
INQUIRY_STATUS_RESPONDED = 'responded'
INQUIRY_STATUS_CLOSED = 'closed'
INQUIRY_STATUSES = (
    INQUIRY_STATUS_PENDING, INQUIRY_STATUS_RESPONDED, INQUIRY_STATUS_CLOSED
)
INQUIRY_PRIORITY_LOW = 'low'
INQUIRY_PRIORITY_MEDIUM = 'medium'
INQUIRY_PRIORITY_HIGH = 'high'
INQUIRY_PRIORITIES = (
    INQUIRY_PRIORITY_LOW, INQUIRY_PRIORITY_MEDIUM, INQUIRY_PRIORITY_HIGH
)
INQUIRY_MESSAGE_MAX_LENGTH = 5000
INQUIRY_PRODUCT_NAME_MAX_LENGTH = 200
INQUIRY_ENUM_MAX_LENGTH = 20

# :::АДМИНИСТРАТОРЫ:::
ADMIN_ROLE_SUPER = 'super-admin'
ADMIN_ROLE_SUB = 'sub-admin'
ADMIN_ROLES = (ADMIN_ROLE_SUPER, ADMIN_ROLE_SUB)
ADMIN_NAME_MIN_LENGTH = 2
ADMIN_NAME_MAX_LENGTH = 100
ADMIN_PHONE_MIN_LENGTH = 10
ADMIN_PHONE_MAX_LENGTH = 20
ADMIN_PASSWORD_MIN_LENGTH = 6
ADMIN_ROLE_MAX_LENGTH = 20

# :::ТОКЕНЫ:::
TOKEN_DICT_KEY_EXPIRE = 'exp'
TOKEN_DICT_KEY_EMAIL = 'sub'
TOKEN_DICT_KEY_ROLE = 'role'
TOKEN_DICT_KEY_ID = 'id'
TOKEN_DICT_KEY_TYPE = 'type'
TOKEN_TYPE_ACCESS = 'access'
TOKEN_TYPE_REFRESH = 'refresh'

# :::ДАШБОРД:::
DASHBOARD_RECENT_DEFAULT_LIMIT = 10
DASHBOARD_RECENT_MAX_LIMIT = 50
