"""
Basic usage example for Event Handler.

This example demonstrates:
1. Registering events
2. Attaching prioritized handlers
3. Adding global before/after hooks
4. Dispatching events and reading the results
"""

from event_handler import Dispatcher, EventNotRegisteredError


def validate_order(order):
    """Reject orders without items."""
    print(f"[VALIDATE] Order {order['id']}")
    return bool(order.get("items"))


def send_receipt(order):
    """Pretend to send a receipt."""
    print(f"[MAIL] Receipt for order {order['id']}")
    return f"receipt-{order['id']}"


def audit(event_name, *args):
    """Global hook that sees every dispatch."""
    print(f"[AUDIT] {event_name}")
    return event_name


def main():
    """Main function demonstrating basic usage."""
    print("=" * 50)
    print("Event Handler - Basic Usage Example")
    print("=" * 50)

    dispatcher = Dispatcher()

    print("\n1. Registering events...")
    dispatcher.register("order.created")
    print(f"   Registered: {dispatcher.get_registered_events()}")

    print("\n2. Attaching handlers...")
    dispatcher.listen("order.created", send_receipt)
    dispatcher.listen("order.created", validate_order, priority=100)
    dispatcher.once("order.created", lambda order: "first order bonus", priority=50)
    for entry in dispatcher.get_listeners("order.created"):
        print(f"   {entry.handler.__name__} (priority={entry.priority})")

    print("\n3. Adding global hooks...")
    dispatcher.listen_global_before(audit)
    dispatcher.listen_global_after(lambda event_name, *args: "done")

    print("\n4. Dispatching 'order.created' twice...")
    for order_id in (1, 2):
        result = dispatcher.use("order.created", {"id": order_id, "items": ["book"]})
        print(f"   Result: {result.to_dict()}")

    print("\n5. Dispatching an unregistered event...")
    try:
        dispatcher.use("order.shipped", {"id": 1})
    except EventNotRegisteredError as e:
        print(f"   Error: {e}")
        print(f"   Before hooks that ran: {e.partial_result.before_hook_results}")

    print("\n" + "=" * 50)
    print("Example completed!")
    print("=" * 50)


if __name__ == "__main__":
    main()
