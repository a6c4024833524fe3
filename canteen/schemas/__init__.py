from .menu import MenuEntry, ActiveMenuResponse, MenuItemRead, MenuItemList, MenuUploadResponse
from .order import SelectionIn, OrderInitiate, OrderInitiated, OrderConfirmed, ReceiptLine, OrderReceipt
from .coupon import CouponRead, CouponRedeemed, CouponList
from .report import TodaySummary
from .user import UserRead, UserCreate
