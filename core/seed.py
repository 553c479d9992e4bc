# core/seed.py
"""
Demo data for prototype mode.

Called once from CoreConfig.ready() (and from the seed_data command).
Dates are relative to the moment of seeding so the demo always has
upcoming events. Pass ``seed`` for a reproducible data set.
"""
import logging
import random
from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from core.auth import ensure_demo_user
from events.models import Event, EventRegistration
from notifications.models import Notification

logger = logging.getLogger("ovento.seed")


USER_PROFILES = [
    {
        "id": "user-sarah-chen",
        "email": "sarah.chen@techstartup.com",
        "first_name": "Sarah",
        "last_name": "Chen",
        "skills": ["JavaScript", "React", "Node.js", "Python", "Machine Learning"],
        "interests": ["AI/ML", "Web Development", "Startups", "Innovation"],
        "bio": "Full-stack developer passionate about AI and building products that make a difference.",
        "profile_image_url": "https://images.unsplash.com/photo-1494790108755-2616b612b786?w=400",
    },
    {
        "id": "user-alex-rivera",
        "email": "alex.rivera@designstudio.co",
        "first_name": "Alex",
        "last_name": "Rivera",
        "skills": ["UI/UX Design", "Figma", "Prototyping", "User Research", "Design Systems"],
        "interests": ["Design", "User Experience", "Innovation", "Creativity"],
        "bio": "UX/UI designer focused on intuitive and beautiful digital experiences.",
        "profile_image_url": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=400",
    },
    {
        "id": "user-jamie-kim",
        "email": "jamie.kim@dataanalytics.org",
        "first_name": "Jamie",
        "last_name": "Kim",
        "skills": ["Python", "Data Science", "Machine Learning", "SQL", "Tableau"],
        "interests": ["Data Analytics", "AI", "Statistics", "Business Intelligence"],
        "bio": "Data scientist turning data into actionable insights.",
        "profile_image_url": "https://images.unsplash.com/photo-1438761681033-6461ffad8d80?w=400",
    },
    {
        "id": "user-taylor-wright",
        "email": "taylor.wright@mobilestudio.dev",
        "first_name": "Taylor",
        "last_name": "Wright",
        "skills": ["Swift", "Kotlin", "React Native", "Mobile Development", "App Store Optimization"],
        "interests": ["Mobile Apps", "Technology", "Gaming", "Innovation"],
        "bio": "Mobile developer building iOS and Android apps that improve daily life.",
        "profile_image_url": "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=400",
    },
    {
        "id": "user-morgan-lee",
        "email": "morgan.lee@blockchain.tech",
        "first_name": "Morgan",
        "last_name": "Lee",
        "skills": ["Blockchain", "Solidity", "Web3", "Smart Contracts", "DeFi"],
        "interests": ["Cryptocurrency", "Blockchain", "DeFi", "Innovation"],
        "bio": "Blockchain developer working on decentralized applications.",
        "profile_image_url": "https://images.unsplash.com/photo-1500648767791-00dcc994a43e?w=400",
    },
    {
        "id": "user-casey-martinez",
        "email": "casey.martinez@cloudtech.io",
        "first_name": "Casey",
        "last_name": "Martinez",
        "skills": ["AWS", "Docker", "Kubernetes", "DevOps", "Cloud Architecture"],
        "interests": ["Cloud Computing", "DevOps", "Automation", "Scalability"],
        "bio": "DevOps engineer building scalable and reliable cloud systems.",
        "profile_image_url": "https://images.unsplash.com/photo-1573496359142-b8d87734a5a2?w=400",
    },
]

# (days from now, duration in hours) drive the dates
EVENTS = [
    {
        "id": "event-ai-hackathon",
        "title": "AI Innovation Hackathon Mumbai",
        "description": "Build AI applications, compete for prizes and meet mentors from Indian tech companies.",
        "type": Event.TYPE_HACKATHON,
        "organizer_id": "user-sarah-chen",
        "starts_in": (14, 57),
        "location": "Bombay Convention & Exhibition Centre, Mumbai",
        "is_virtual": False,
        "max_participants": 500,
        "registration_fee": "750.00",
        "prize_pool": "20000.00",
        "requirements": ["Programming experience", "Laptop required", "Team of 2-4 members"],
        "tags": ["AI", "Machine Learning", "Innovation", "Competition"],
        "require_project_submission": True,
    },
    {
        "id": "event-web3-workshop",
        "title": "Web3 & Blockchain Development Workshop Bangalore",
        "description": "Smart contracts, DeFi protocols and decentralized apps with hands-on labs.",
        "type": Event.TYPE_WORKSHOP,
        "organizer_id": "user-morgan-lee",
        "starts_in": (19, 7),
        "location": "Microsoft Reactor, Bengaluru",
        "is_virtual": False,
        "max_participants": 100,
        "registration_fee": "650.00",
        "prize_pool": "0.00",
        "requirements": ["Basic programming knowledge", "Laptop with development tools"],
        "tags": ["Blockchain", "Web3", "Smart Contracts", "Education"],
    },
    {
        "id": "event-startup-pitch",
        "title": "India Startup Pitch Competition Delhi",
        "description": "Pitch your startup to VCs and angel investors and get expert feedback.",
        "type": Event.TYPE_CONFERENCE,
        "organizer_id": "user-alex-rivera",
        "starts_in": (31, 11),
        "location": "India Habitat Centre, New Delhi",
        "is_virtual": False,
        "max_participants": 200,
        "registration_fee": "900.00",
        "prize_pool": "25000.00",
        "requirements": ["Functioning prototype or MVP", "Pitch deck required"],
        "tags": ["Startups", "Venture Capital", "Pitch", "Funding", "India"],
    },
    {
        "id": "event-mobile-bootcamp",
        "title": "Mobile App Development Bootcamp Hyderabad",
        "description": "Three days of React Native, Flutter, Swift and Kotlin. Ship your first app.",
        "type": Event.TYPE_WORKSHOP,
        "organizer_id": "user-taylor-wright",
        "starts_in": (40, 56),
        "location": "T-Hub, Hyderabad",
        "is_virtual": False,
        "max_participants": 80,
        "registration_fee": "850.00",
        "prize_pool": "0.00",
        "requirements": ["Basic programming knowledge", "Android device recommended"],
        "tags": ["Mobile Development", "iOS", "Android", "React Native", "Flutter"],
    },
    {
        "id": "event-data-science-challenge",
        "title": "Data Science Challenge: Smart India Solutions",
        "description": "Predictive models on agriculture, healthcare, education and urban planning data.",
        "type": Event.TYPE_HACKATHON,
        "organizer_id": "user-jamie-kim",
        "starts_in": (45, 36),
        "location": "IIT Madras, Chennai",
        "is_virtual": False,
        "max_participants": 300,
        "registration_fee": "0.00",
        "prize_pool": "15000.00",
        "requirements": ["Data science/ML experience", "Python or R knowledge"],
        "tags": ["Data Science", "Smart India", "Machine Learning", "Social Impact"],
        "require_project_submission": True,
    },
    {
        "id": "event-devops-summit",
        "title": "Cloud & DevOps Summit Pune",
        "description": "Containers, microservices and cloud-native practice from Indian IT leaders.",
        "type": Event.TYPE_CONFERENCE,
        "organizer_id": "user-casey-martinez",
        "starts_in": (59, 58),
        "location": "Pune IT Park, Maharashtra",
        "is_virtual": False,
        "max_participants": 1000,
        "registration_fee": "1000.00",
        "prize_pool": "0.00",
        "requirements": ["DevOps or cloud experience", "2+ years experience"],
        "tags": ["DevOps", "Cloud Computing", "Kubernetes", "AWS", "Azure", "India IT"],
    },
    {
        "id": "event-ux-design-thinking",
        "title": "UX Design Thinking Workshop Kolkata",
        "description": "User research, prototyping and designing for multilingual Indian audiences.",
        "type": Event.TYPE_WORKSHOP,
        "organizer_id": "user-alex-rivera",
        "starts_in": (68, 8),
        "location": "Webel IT Park, Kolkata",
        "is_virtual": False,
        "max_participants": 50,
        "registration_fee": "700.00",
        "prize_pool": "0.00",
        "requirements": ["Design interest", "Laptop recommended"],
        "tags": ["UX Design", "Design Thinking", "User Research", "India UX"],
    },
    {
        "id": "event-cybersec-quiz",
        "title": "Cybersecurity Knowledge Challenge India",
        "description": "Online quiz on ethical hacking, network security, cryptography and Indian cyber law.",
        "type": Event.TYPE_QUIZ,
        "organizer_id": "user-casey-martinez",
        "starts_in": (73, 2),
        "location": "Virtual Event (India)",
        "is_virtual": True,
        "max_participants": 500,
        "registration_fee": "500.00",
        "prize_pool": "12000.00",
        "requirements": ["Basic cybersecurity knowledge", "Internet connection"],
        "tags": ["Cybersecurity", "Quiz", "Network Security", "Ethical Hacking", "India"],
    },
]

TEAM_NAMES = ["Code Crusaders", "Innovation Squad", "Tech Titans", "Data Dynamos", "AI Avengers", "Cloud Climbers"]
TEAM_SKILLS = ["JavaScript", "Python", "Design", "Machine Learning"]

CHAT_MESSAGES = [
    "Hey everyone! Really excited for this event",
    "Looking forward to meeting you all and building something awesome!",
    "Anyone interested in forming a team? I have experience with React and Node.js",
    "This is going to be an amazing learning experience",
    "Can't wait to see what solutions we come up with!",
    "First time at this type of event - any tips for newcomers?",
    "The agenda looks fantastic. Especially excited about the AI workshops!",
    "Who else is working on climate tech solutions?",
    "Anyone want to grab coffee during the break?",
    "Thanks to the organizers for putting together such a great event!",
]


def _event_payload(template, now):
    data = dict(template)
    days, hours = data.pop("starts_in")
    start = (now + timedelta(days=days)).replace(hour=9, minute=0, second=0, microsecond=0)
    data.update(
        status=Event.STATUS_PUBLISHED,
        start_date=start,
        end_date=start + timedelta(hours=hours),
        registration_fee=Decimal(data["registration_fee"]),
        prize_pool=Decimal(data["prize_pool"]),
        rsvp_deadline=start - timedelta(days=3),
        project_submission_deadline=(
            start + timedelta(hours=hours) if data.get("require_project_submission") else None
        ),
    )
    return data


def seed_users(storage):
    users = [storage.upsert_user(profile) for profile in USER_PROFILES]
    users.append(ensure_demo_user(storage))
    return users


def seed_events(storage, rng):
    now = timezone.now()
    events = []
    for template in EVENTS:
        event = storage.create_event(_event_payload(template, now))
        storage.record_event_metric(event.id, "views", rng.randint(100, 1099))
        storage.record_event_metric(event.id, "registrations", rng.randint(10, 59))
        storage.record_event_metric(event.id, "engagement_score", rng.randint(50, 149))
        events.append(event)
    return events


def seed_registrations(storage, rng, users, events):
    user_ids = [u.id for u in users]
    for event in events:
        # organizers do not register for their own events
        candidates = [uid for uid in user_ids if uid != event.organizer_id]
        count = min(len(candidates), rng.randint(3, 6))
        for user_id in rng.sample(candidates, count):
            registration = storage.register_for_event(event.id, user_id)
            if rng.random() > 0.2:
                storage.update_registration_payment_status(
                    registration.id,
                    EventRegistration.PAYMENT_COMPLETED,
                    f"pi_{rng.getrandbits(48):x}",
                )


def seed_teams(storage, rng, events):
    for event in events:
        if event.type != Event.TYPE_HACKATHON:
            continue
        registrations = storage.get_event_registrations(event.id)
        team_count = rng.randint(2, 6)
        for i in range(min(team_count, len(registrations))):
            team = storage.create_team({
                "name": f"{rng.choice(TEAM_NAMES)} {i + 1}",
                "description": "Passionate team ready to build something amazing!",
                "event_id": event.id,
                "leader_id": registrations[i].user_id,
                "max_members": 4,
                "skills": TEAM_SKILLS[:rng.randint(2, 4)],
            })
            for j in range(1, rng.randint(1, 3) + 1):
                if i + j >= len(registrations):
                    break
                storage.join_team(team.id, registrations[i + j].user_id)
            if rng.random() <= 0.3:
                storage.update_team(team.id, {"is_open": False})


def seed_chat(storage, rng, users, events):
    user_ids = [u.id for u in users]
    for event in events:
        for _ in range(rng.randint(3, 10)):
            storage.create_chat_message({
                "event_id": event.id,
                "user_id": rng.choice(user_ids),
                "message": rng.choice(CHAT_MESSAGES),
            })


def seed_notifications(storage, users):
    for user in users:
        storage.create_notification({
            "user_id": user.id,
            "title": "New Events You Might Like",
            "message": "Check out these upcoming events that match your interests!",
            "type": Notification.TYPE_EVENT_RECOMMENDATION,
        })

        registrations = storage.get_user_registrations(user.id)
        event = storage.get_event(registrations[0].event_id) if registrations else None
        if event:
            storage.create_notification({
                "user_id": user.id,
                "title": "Registration Confirmed",
                "message": f"You're all set for {event.title}! Event starts {event.start_date:%d %b %Y}.",
                "type": Notification.TYPE_REGISTRATION_CONFIRMED,
                "data": {"event_id": event.id},
            })

        storage.create_notification({
            "user_id": user.id,
            "title": "Welcome to Ovento!",
            "message": "Discover events, connect with like-minded people, and build something incredible.",
            "type": Notification.TYPE_WELCOME,
        })


def seed_demo_data(storage, seed=None):
    """
    Fills ``storage`` with the demo data set and returns its counts.
    """
    rng = random.Random(seed)
    logger.info("Seeding prototype demo data...")

    users = seed_users(storage)
    events = seed_events(storage, rng)
    seed_registrations(storage, rng, users, events)
    seed_teams(storage, rng, events)
    seed_chat(storage, rng, users, events)
    seed_notifications(storage, users)
    storage.initialize_ai_recommendations()

    counts = storage.counts()
    logger.info(f"Demo data ready: {counts}")
    return counts
