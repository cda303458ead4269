"""Application service for checkout."""

import logging
from typing import Dict

from sqlalchemy.ext.asyncio import async_sessionmaker

from storefront.application.dtos import CheckoutRequest, CheckoutResponse
from storefront.application.dtos.checkout_dto import CheckoutOrderDataDTO
from storefront.application.interfaces import AuthenticatedUser, IPaymentGateway
from storefront.data.uow import create_uow
from storefront.domain.entities import Order, OrderLine, Product
from storefront.domain.enums import OrderStatus, ShippingMethod
from storefront.domain.errors import (
    InsufficientStock,
    InternalError,
    PriceMismatch,
    UpstreamGatewayError,
    ValidationError,
)
from storefront.domain.value_objects import Money, OrderNumber
from storefront.settings import MidtransSettings, StorefrontSettings

from .payment_sessions import build_session_request

logger = logging.getLogger(__name__)

ORDER_NUMBER_ATTEMPTS = 5


class CheckoutService:
    """
    Turns a cart into a pending order with reserved stock and a hosted
    payment session.

    Order creation and stock reservation share one transaction. The
    gateway is called only after that transaction commits.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        gateway: IPaymentGateway,
        storefront: StorefrontSettings,
        midtrans: MidtransSettings,
    ) -> None:
        """Initialize checkout service.

        Args:
            session_factory: SQLAlchemy async session factory
            gateway: Payment gateway adapter
            storefront: Business settings (fees, tolerance, base URL)
            midtrans: Gateway settings (production mode)
        """
        self._session_factory = session_factory
        self._gateway = gateway
        self._storefront = storefront
        self._midtrans = midtrans

    async def checkout(self, user: AuthenticatedUser, request: CheckoutRequest) -> CheckoutResponse:
        """Create the order, reserve stock and open a payment session.

        Args:
            user: Authenticated buyer
            request: Cart and buyer details

        Returns:
            CheckoutResponse with session token, redirect URL and order number

        Raises:
            ValidationError: Empty cart, unknown product or bad buyer details
            InsufficientStock: A line exceeds available size stock
            PriceMismatch: Submitted total differs from the computed one
            UpstreamGatewayError: Order created but the gateway failed
        """
        if not request.items:
            raise ValidationError("Cart is empty")

        data = request.order_data
        if self._midtrans.is_production:
            self._validate_buyer(data)

        uow = create_uow(self._session_factory)
        async with uow:
            logger.info(f"[{uow.execution_id}] Checkout for user {user.id}: {len(request.items)} items")

            # 1. Availability check, no mutation yet
            for item in request.items:
                available = await uow.inventory.get_quantity(item.product_id, item.ukuran) or 0
                if available < item.quantity:
                    raise InsufficientStock(item.product_id, item.ukuran, available, item.quantity)

            # 2. Authoritative total
            products = await uow.products.get_many(item.product_id for item in request.items)
            total = self._compute_total(request, products)
            if not total.is_close_to(data.total, self._storefront.amount_tolerance):
                logger.warning(
                    f"[{uow.execution_id}] Price mismatch: submitted {data.total}, computed {total.amount}"
                )
                raise PriceMismatch(
                    "Order total does not match current prices",
                    details={"expected_total": str(total.amount), "submitted_total": str(data.total)},
                )

            # 3. Order + lines
            order_number = await self._allocate_order_number(uow)
            order = await uow.orders.add(
                Order(
                    order_number=order_number,
                    user_id=user.id,
                    total=total,
                    status=OrderStatus.PENDING,
                    lines=[
                        OrderLine(
                            product_id=item.product_id,
                            size=item.ukuran,
                            quantity=item.quantity,
                            unit_price=products[item.product_id].price,
                        )
                        for item in request.items
                    ],
                    payment_method=data.payment_method,
                    shipping_method=data.shipping_method.value,
                    shipping_address=data.shipping_address,
                    buyer_name=data.nama_pembeli,
                    buyer_email=data.email_pembeli,
                    buyer_phone=data.telepon_pembeli,
                    stock_reserved=True,
                )
            )

            # 4. Reserve; any refusal rolls back the whole order
            for line in order.lines:
                if not await uow.inventory.reserve(line.product_id, line.size, line.quantity):
                    available = await uow.inventory.get_quantity(line.product_id, line.size) or 0
                    raise InsufficientStock(line.product_id, line.size, available, line.quantity)

            for product_id in sorted({line.product_id for line in order.lines}):
                await uow.inventory.recompute_product_stock(product_id)

            await uow.commit()
            logger.info(f"[{uow.execution_id}] Order {order_number} created, total {total}")

        # 5. Payment session, outside the stock transaction
        session_request = build_session_request(
            order, products, order.order_number.value, self._storefront.base_url
        )
        try:
            session = await self._gateway.create_session(session_request)
        except UpstreamGatewayError as exc:
            logger.error(
                f"Payment session for order {order.order_number} failed: {exc.message}. "
                "Order left pending for recovery."
            )
            exc.details.setdefault("order_number", order.order_number.value)
            raise

        uow = create_uow(self._session_factory)
        async with uow:
            stored = await uow.orders.find_by_id(order.id)
            stored.attach_payment_session(
                redirect_url=session.redirect_url,
                token=session.token,
                gateway_order_id=order.order_number.value,
            )
            await uow.orders.update(stored)
            await uow.commit()

        return CheckoutResponse(
            token=session.token,
            redirect_url=session.redirect_url,
            order_id=order.order_number.value,
        )

    def _compute_total(self, request: CheckoutRequest, products: Dict[str, Product]) -> Money:
        total = Money.zero()
        for item in request.items:
            product = products.get(item.product_id)
            if product is None:
                raise ValidationError(
                    f"Product {item.product_id} is not available",
                    details={"product_id": item.product_id},
                )
            total = total + product.price * item.quantity

        if request.order_data.shipping_method == ShippingMethod.EXPRESS:
            total = total + Money(self._storefront.express_shipping_fee)
        return total

    async def _allocate_order_number(self, uow) -> OrderNumber:
        for _ in range(ORDER_NUMBER_ATTEMPTS):
            candidate = OrderNumber.generate(prefix=self._storefront.order_number_prefix)
            if not await uow.orders.exists(candidate.value):
                return candidate
        raise InternalError("Could not allocate a unique order number")

    @staticmethod
    def _validate_buyer(data: CheckoutOrderDataDTO) -> None:
        """Live gateway refuses sessions with incomplete customer details."""
        problems = []
        if len(data.nama_pembeli.strip()) < 2:
            problems.append("name must be at least 2 characters")
        if "@" not in data.email_pembeli:
            problems.append("email is invalid")
        if len(data.telepon_pembeli.strip()) < 8:
            problems.append("phone must be at least 8 characters")
        if len(data.shipping_address.strip()) < 10:
            problems.append("address must be at least 10 characters")
        if problems:
            raise ValidationError(
                f"Invalid buyer details: {', '.join(problems)}",
                details={"problems": problems},
            )
