from apps.core.exceptions import Conflict, InfrastructureError, ValidationFailed


class EmptyCart(ValidationFailed):
    default_message = "购物车为空，无法结账"


class InsufficientStock(Conflict):
    default_message = "部分产品库存不足或不可用"

    def __init__(self, items, message=None):
        self.items = list(items)
        super().__init__(message, unavailable_products=self.items)


class TransactionFailed(InfrastructureError):
    default_message = "订单创建失败"


class OrderNotRetrievableAfterCommit(InfrastructureError):
    """커밋은 성공(주문 존재). 재시도하지 말고 order_id 와 함께 보고"""

    default_message = "订单创建成功但无法获取订单详情"

    def __init__(self, order_id, message=None):
        self.order_id = str(order_id)
        super().__init__(message, order_id=self.order_id)


class InvalidStatus(ValidationFailed):
    default_message = "无效的订单状态"
