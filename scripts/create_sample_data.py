#!/usr/bin/env python
"""
Script to fill the database with demo data:
- 50 subscribers
- 10 newspapers across every publication frequency
- about 120 subscriptions, a mix of active, expired and cancelled,
  some of them ending within the next month
"""
import random
from datetime import date, timedelta
from decimal import Decimal

from faker import Faker

from newsdesk import create_app, db
from newsdesk.models import Newspaper, NewspaperFrequency, Subscriber, Subscription, SubscriptionStatus

# Initialize faker for generating realistic data
fake = Faker()

SUBSCRIBER_COUNT = 50
NEWSPAPER_COUNT = 10
SUBSCRIPTIONS_PER_SUBSCRIBER = (1, 4)


def create_subscribers():
    subscribers = []
    for i in range(SUBSCRIBER_COUNT):
        subscribers.append(Subscriber(
            name=fake.name(),
            # Suffix keeps emails unique across runs of faker
            email=f"{fake.user_name()}_{i}@{fake.free_email_domain()}",
            phone=fake.phone_number()[:30],
            address=fake.address().replace("\n", ", ")[:255],
        ))
    db.session.add_all(subscribers)
    db.session.commit()
    return subscribers


def create_newspapers():
    frequencies = NewspaperFrequency.values()
    newspapers = []
    for i in range(NEWSPAPER_COUNT):
        newspapers.append(Newspaper(
            name=f"The {fake.city()} {fake.word().title()} {i + 1}",
            publisher=fake.company(),
            frequency=frequencies[i % len(frequencies)],
            price=Decimal(random.randint(500, 25000)) / 100,
            description=fake.sentence(nb_words=12),
        ))
    db.session.add_all(newspapers)
    db.session.commit()
    return newspapers


def create_subscriptions(subscribers, newspapers):
    today = date.today()
    created = 0
    for subscriber in subscribers:
        count = random.randint(*SUBSCRIPTIONS_PER_SUBSCRIBER)
        for newspaper in random.sample(newspapers, count):
            status = random.choice(SubscriptionStatus.values())
            if status == SubscriptionStatus.EXPIRED.value:
                end_date = today - timedelta(days=random.randint(1, 180))
            elif status == SubscriptionStatus.ACTIVE.value:
                end_date = today + timedelta(days=random.randint(0, 365))
            else:
                end_date = today + timedelta(days=random.randint(-90, 180))
            start_date = end_date - timedelta(days=random.choice((30, 90, 180, 365)))

            db.session.add(Subscription(
                subscriber_id=subscriber.id,
                newspaper_id=newspaper.id,
                start_date=start_date,
                end_date=end_date,
                status=status,
            ))
            created += 1
    db.session.commit()
    return created


def create_sample_data():
    """Create subscribers, newspapers and subscriptions."""
    print("Starting sample data generation...")

    subscribers = create_subscribers()
    print(f"Created {len(subscribers)} subscribers")

    newspapers = create_newspapers()
    print(f"Created {len(newspapers)} newspapers")

    created = create_subscriptions(subscribers, newspapers)
    print(f"Created {created} subscriptions")


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
        create_sample_data()
