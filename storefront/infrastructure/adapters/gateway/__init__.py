from .midtrans_gateway import MidtransPaymentGateway
from .mock_gateway import MockPaymentGateway

__all__ = ["MidtransPaymentGateway", "MockPaymentGateway"]
