"""Cart clearing: command and handler, issued after an order is placed."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.domain import ordering


@ordering.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@ordering.repository(part_of=Cart)
class CartRepository:
    def find_for_user(self, user_id) -> list[Cart]:
        return self._dao.query.filter(user_id=str(user_id)).all().items


@ordering.command_handler(part_of=Cart)
class ClearCartHandler:
    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        removed = 0
        for cart in repo.find_for_user(command.user_id):
            removed += cart.empty()
            repo.add(cart)
        return removed
