"""Keys of the storefront's locally persisted documents."""

SESSION_ID = "qahwa-session-id"
GUEST_MODE = "qahwa-guest-mode"
CUSTOMER_PROFILE = "qahwa-customer-profile"
DELIVERY_INFO = "qahwa-delivery-info"
LOCAL_ORDERS = "qahwa-local-orders"
