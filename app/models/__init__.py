# app/models/__init__.py
from app.models.catalog_models import Package, Item
from app.models.coupon_models import Coupon, DiscountType
from app.models.order_models import Order, OrderItem, OrderStatus, OrderType
from app.models.transaction_models import Transaction
from app.models.payment_intent_models import PaymentIntent
from app.models.setting_models import Setting
from app.models.admin_models import AdminUser
from app.models.activity_models import AdminActivity
