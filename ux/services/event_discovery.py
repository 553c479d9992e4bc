# ux/services/event_discovery.py

from events.serializers import EventCardSerializer


def serialize_event_cards(storage, events):
    return EventCardSerializer(events, many=True, context={"storage": storage}).data


# 1️⃣ DISCOVER (marketplace listing, type/status filters only)
def get_discover_events(storage, type=None, status=None):
    events = storage.get_events(type=type, status=status)
    return serialize_event_cards(storage, events)


# 2️⃣ TRENDING (published, upcoming, by registrations)
def get_trending_events(storage):
    return serialize_event_cards(storage, storage.get_trending_events())


# 3️⃣ RECOMMENDED (from the user's stored recommendations)
def get_recommended_events(storage, user):
    return serialize_event_cards(storage, storage.get_recommended_events(user.id))


# 4️⃣ SEARCH (title substring, empty without a query)
def search_events(storage, query):
    query = (query or "").strip()
    if not query:
        return []
    return serialize_event_cards(storage, storage.search_events(query))
