from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy import select

from edupath.db.models import Scholarship, University
from edupath.utils.logging import get_logger

logger = get_logger()

# (name, university name, amount, deadline, description)
SCHOLARSHIPS = [
    (
        "NSU Merit Scholarship",
        "North South University",
        "100% Tuition Waiver",
        date(2025, 6, 30),
        "Awarded to top performers in the admission test. Requires maintaining a minimum CGPA of 3.5 throughout the program.",
    ),
    (
        "BRACU Need-based Aid",
        "BRAC University",
        "Up to 100% Waiver",
        date(2025, 7, 15),
        "Financial assistance for students with demonstrated financial need. Requires submission of income tax returns and other financial documents.",
    ),
    (
        "AIUB Academic Excellence",
        "AIUB",
        "50% Tuition Waiver",
        date(2025, 8, 1),
        "For students maintaining a CGPA of 3.8 or above. Applicable for the subsequent semester.",
    ),
    (
        "DU Merit Grant",
        "University of Dhaka",
        "Monthly Stipend",
        date(2025, 5, 20),
        "Awarded to the top 10 students in each faculty based on admission test results.",
    ),
    (
        "BUET Research Fellowship",
        "BUET",
        "Full Funding",
        date(2025, 9, 15),
        "For undergraduate students participating in faculty-led research projects in engineering.",
    ),
    (
        "EWU Medha Lalon",
        "East West University",
        "100% Waiver",
        date(2025, 6, 15),
        "Merit-based scholarship for students with GPA 5.0 in both SSC and HSC.",
    ),
    (
        "IUB Financial Grant",
        "Independent University, Bangladesh",
        "25-50% Waiver",
        date(2025, 7, 20),
        "Need-based grant for students from low-income families or remote areas.",
    ),
    (
        "UIU Innovation Award",
        "United International University",
        "Fixed Grant",
        date(2025, 10, 10),
        "Awarded to students who demonstrate exceptional projects in the UIU Innovation Lab.",
    ),
]


def seed_scholarships(db_session: Session):
    """Add the reference scholarships, linking each to its university by name"""

    university_ids = {
        name: uni_id
        for uni_id, name in db_session.execute(
            select(University.id, University.name)
        ).all()
    }
    existing_names = set(
        db_session.execute(select(Scholarship.name)).scalars().all()
    )

    scholarships = []
    for name, university_name, amount, deadline, description in SCHOLARSHIPS:
        if name in existing_names:
            continue

        university_id = university_ids.get(university_name)
        if university_id is None:
            logger.warning(
                f"University {university_name} not found, skipping scholarship {name}"
            )
            continue

        scholarships.append(
            Scholarship(
                name=name,
                university_id=university_id,
                amount=amount,
                deadline=deadline,
                description=description,
            )
        )

    db_session.add_all(scholarships)
    db_session.commit()
    logger.info(f"Seeded {len(scholarships)} scholarships")
