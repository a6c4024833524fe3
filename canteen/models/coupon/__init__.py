from .coupon import Coupon, CouponStatus, OrderType, COUPON_TRANSITIONS, can_transition
