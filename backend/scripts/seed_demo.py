"""
Seed a demo account with sample employees for development.
Run: python -m scripts.seed_demo  (from backend/)
"""

import asyncio

from roster.db.session import async_session, init_models
from roster.repositories.employees import create_employee, list_employees
from roster.repositories.users import create_user, get_user_by_email

DEMO_USER = {
    "name": "Demo Manager",
    "email": "demo@example.com",
    "password": "demo123",  # Change in production!
}

SEED_EMPLOYEES = [
    ("Jane", "Doe", "jane.doe@example.com", "Engineering", 80000),
    ("Arjun", "Mehta", "arjun.mehta@example.com", "Engineering", 95000),
    ("Priya", "Nair", "priya.nair@example.com", "Finance", 72000),
    ("Tom", "Becker", "tom.becker@example.com", "Sales", 56000),
    ("Ama", "Owusu", "ama.owusu@example.com", "HR", 61000),
    ("Liu", "Wei", "liu.wei@example.com", "Engineering", 102000),
    ("Sara", "Lopez", "sara.lopez@example.com", "Marketing", 64000),
]


async def seed():
    """Insert the demo user and employees (skips rows that already exist)."""
    await init_models()
    async with async_session() as session:
        user = await get_user_by_email(session, DEMO_USER["email"])
        if user is None:
            user = await create_user(db=session, **DEMO_USER)
            print(f"  Created user: {user.email}")

        existing = {e.email.lower() for e in await list_employees(session, user.id)}
        created = 0
        for first, last, email, department, salary in SEED_EMPLOYEES:
            if email.lower() in existing:
                print(f"  Skipped existing employee: {email}")
                continue
            await create_employee(
                session,
                user.id,
                first_name=first,
                last_name=last,
                email=email,
                department=department,
                salary=salary,
            )
            created += 1
        await session.commit()
    print(f"Seeded {created} employees for {DEMO_USER['email']}.")


if __name__ == "__main__":
    asyncio.run(seed())
