SUCCESS_CODE = "0000"

# Signature hash. SHA-1 is weak but the gateway verifies with it, so it
# stays for wire compatibility.
SIGN_HASH = "sha1"
SIGN_FIELD = "sign"

DEFAULT_TIMEOUT = 10.0  # seconds, whole round trip

PATH_QR_PAY = "/pay/qr"
PATH_QUERY = "/pay/query"

PRODUCT_CODE_WECHAT_QR = "1001"
PRODUCT_CODE_ALIPAY_QR = "2001"
PRODUCT_CODE_INTEGRATION_QR = "4001"

ORDER_TYPE_PAYMENT = 1
ORDER_TYPE_REFUND = 2

ORDER_STATUS_FINISHED = 1
ORDER_STATUS_UNFINISHED = 2
