"""User-facing notices, Arabic first with an English rendering."""

from typing import Literal

from pydantic import BaseModel


class Notice(BaseModel):
    level: Literal["success", "info", "error"]
    text_ar: str
    text_en: str


_CATALOG = {
    "cart.added": ("success", "تمت الإضافة إلى السلة", "Added to cart"),
    "cart.updated": ("success", "تم تحديث السلة", "Cart updated"),
    "cart.removed": ("info", "تمت إزالة المنتج من السلة", "Item removed from cart"),
    "cart.cleared": ("info", "تم إفراغ السلة", "Cart cleared"),
    "cart.invalid_quantity": ("error", "الكمية غير صحيحة", "Invalid quantity"),
    "cart.failed": ("error", "تعذر تحديث السلة: {detail}", "Could not update the cart: {detail}"),
    "delivery.saved": ("success", "تم حفظ طريقة الاستلام", "Fulfillment choice saved"),
    "delivery.invalid": ("error", "بيانات الاستلام غير مكتملة", "Fulfillment details are incomplete"),
    "order.placed": ("success", "تم استلام طلبك رقم {order_number}", "Order {order_number} received"),
    "order.missing_fulfillment": (
        "error",
        "اختر الاستلام من الفرع أو التوصيل أو الطاولة",
        "Choose pickup, delivery or dine-in",
    ),
    "order.empty_cart": ("error", "السلة فارغة", "The cart is empty"),
    "order.failed": ("error", "تعذر إرسال الطلب: {detail}", "Could not submit the order: {detail}"),
    "order.status_changed": (
        "info",
        "تغيرت حالة الطلب {order_number} إلى {status}",
        "Order {order_number} is now {status}",
    ),
    "account.registered": ("success", "مرحباً {name}! رقم بطاقتك {card_number}", "Welcome {name}! Your card is {card_number}"),
    "account.failed": ("error", "تعذر التسجيل: {detail}", "Registration failed: {detail}"),
    "loyalty.redeemed": ("success", "استمتع بمشروبك المجاني", "Enjoy your free drink"),
    "loyalty.no_free_drinks": ("error", "لا توجد مشروبات مجانية في بطاقتك", "No free drinks on your card"),
    "loyalty.guest": ("error", "سجّل للحصول على بطاقة الولاء", "Register to get a loyalty card"),
    "loyalty.failed": ("error", "تعذر استخدام المشروب المجاني: {detail}", "Could not redeem the free drink: {detail}"),
    "service.unavailable": ("error", "الخدمة غير متاحة حالياً", "The service is unavailable right now"),
}


def notice(key: str, **params) -> Notice:
    level, text_ar, text_en = _CATALOG[key]
    return Notice(level=level, text_ar=text_ar.format(**params), text_en=text_en.format(**params))
