"""
Advanced usage example for Event Handler.

This example demonstrates:
1. The process-wide Event facade
2. Events keyed by object type
3. Subscriber objects with @listens_to
4. Dispatch tracing
"""

import logging

from event_handler import Dispatcher, Event, listens_to


class UserRegistered:
    def __init__(self, email):
        self.email = email


class Onboarding:
    """Subscriber reacting to account events."""

    def __init__(self):
        self.sent = []

    @listens_to("account.verified", priority=10)
    def send_welcome(self, email):
        self.sent.append(email)
        return f"welcome sent to {email}"

    @listens_to("account.verified")
    @listens_to("account.closed")
    def update_crm(self, email):
        return f"crm updated for {email}"


def main():
    """Main function demonstrating advanced features."""
    logging.basicConfig(level=logging.INFO)

    print("=" * 50)
    print("Event Handler - Advanced Usage Example")
    print("=" * 50)

    print("\n1. Typed events through the Event facade...")
    Event.register_event(UserRegistered)
    Event.listen_event(UserRegistered, lambda event: f"stored {event.email}")
    result = Event.use_event(UserRegistered("ana@example.com"))
    print(f"   Result: {result.event_results}")

    print("\n2. Subscribers...")
    dispatcher = Dispatcher(tracing=True, log_level="DEBUG")
    dispatcher.register("account.verified")
    dispatcher.register("account.closed")
    onboarding = Onboarding()
    print(f"   Attached {dispatcher.subscribe(onboarding)} handlers")

    print("\n3. Traced dispatch...")
    result = dispatcher.use("account.verified", "ana@example.com")
    print(f"   Result: {result.event_results}")

    print("\n4. Unsubscribing...")
    print(f"   Removed {dispatcher.unsubscribe(onboarding)} handlers")
    print(f"   Remaining: {dispatcher.get_listeners('account.verified')}")

    print("\n" + "=" * 50)
    print("Example completed!")
    print("=" * 50)


if __name__ == "__main__":
    main()
