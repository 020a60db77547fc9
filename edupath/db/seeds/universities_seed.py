from sqlalchemy.orm import Session
from sqlalchemy import select

from edupath.db.models import University, UniversityType
from edupath.utils.logging import get_logger

logger = get_logger()

# (name, type, location, description, min_ssc_gpa, min_hsc_gpa, website)
UNIVERSITIES = [
    (
        "University of Dhaka",
        UniversityType.PUBLIC,
        "Dhaka",
        "The oldest and most prestigious university in Bangladesh, offering a wide range of disciplines.",
        4.5,
        4.5,
        "https://www.du.ac.bd",
    ),
    (
        "BUET",
        UniversityType.PUBLIC,
        "Dhaka",
        "Bangladesh University of Engineering and Technology, the premier engineering institution.",
        5.0,
        5.0,
        "https://www.buet.ac.bd",
    ),
    (
        "Jahangirnagar University",
        UniversityType.PUBLIC,
        "Savar",
        "A fully residential public university known for its scenic campus and research.",
        4.0,
        4.0,
        "https://www.juniv.edu",
    ),
    (
        "University of Rajshahi",
        UniversityType.PUBLIC,
        "Rajshahi",
        "One of the largest and oldest universities in the country with a rich academic history.",
        4.0,
        4.0,
        "https://www.ru.ac.bd",
    ),
    (
        "University of Chittagong",
        UniversityType.PUBLIC,
        "Chittagong",
        "A major public research university located in the hills of Chittagong.",
        4.0,
        4.0,
        "https://www.cu.ac.bd",
    ),
    (
        "SUST",
        UniversityType.PUBLIC,
        "Sylhet",
        "Shahjalal University of Science and Technology, a leader in science and tech education.",
        4.5,
        4.5,
        "https://www.sust.edu",
    ),
    (
        "Khulna University",
        UniversityType.PUBLIC,
        "Khulna",
        "A top-tier public university known for its academic excellence and discipline.",
        4.0,
        4.0,
        "https://ku.ac.bd",
    ),
    (
        "Jagannath University",
        UniversityType.PUBLIC,
        "Dhaka",
        "A prominent public university located in the heart of Old Dhaka.",
        4.0,
        4.0,
        "https://jnu.ac.bd",
    ),
    (
        "Bangladesh Agricultural University",
        UniversityType.PUBLIC,
        "Mymensingh",
        "The premier institution for agricultural education and research.",
        4.0,
        4.0,
        "https://www.bau.edu.bd",
    ),
    (
        "North South University",
        UniversityType.PRIVATE,
        "Dhaka",
        "The first private university in Bangladesh, known for its business and engineering programs.",
        3.5,
        3.5,
        "https://www.northsouth.edu",
    ),
    (
        "BRAC University",
        UniversityType.PRIVATE,
        "Dhaka",
        "A leading private university focused on liberal arts and social impact.",
        3.5,
        3.5,
        "https://www.bracu.ac.bd",
    ),
    (
        "AIUB",
        UniversityType.PRIVATE,
        "Dhaka",
        "American International University-Bangladesh, excellence in engineering and technology.",
        3.0,
        3.0,
        "https://www.aiub.edu",
    ),
    (
        "East West University",
        UniversityType.PRIVATE,
        "Dhaka",
        "A top-ranked private university with strong business and science faculties.",
        3.0,
        3.0,
        "https://www.ewubd.edu",
    ),
    (
        "Independent University, Bangladesh",
        UniversityType.PRIVATE,
        "Dhaka",
        "Known for its modern campus and diverse range of undergraduate programs.",
        3.0,
        3.0,
        "https://www.iub.edu.bd",
    ),
    (
        "United International University",
        UniversityType.PRIVATE,
        "Dhaka",
        "A rapidly growing private university with a focus on research and innovation.",
        3.0,
        3.0,
        "https://www.uiu.ac.bd",
    ),
    (
        "AUST",
        UniversityType.PRIVATE,
        "Dhaka",
        "Ahsanullah University of Science and Technology, highly regarded for engineering.",
        4.0,
        4.0,
        "https://www.aust.edu",
    ),
    (
        "Daffodil International University",
        UniversityType.PRIVATE,
        "Dhaka",
        "A leading private university with a strong focus on ICT and entrepreneurship.",
        2.5,
        2.5,
        "https://daffodilvarsity.edu.bd",
    ),
]


def seed_universities(db_session: Session):
    """Add the reference universities that are not in the table yet (matched by name)"""

    existing_names = set(db_session.execute(select(University.name)).scalars().all())

    universities = [
        University(
            name=name,
            type=uni_type,
            location=location,
            description=description,
            min_ssc_gpa=min_ssc,
            min_hsc_gpa=min_hsc,
            website=website,
        )
        for name, uni_type, location, description, min_ssc, min_hsc, website in UNIVERSITIES
        if name not in existing_names
    ]

    db_session.add_all(universities)
    db_session.commit()
    logger.info(f"Seeded {len(universities)} universities")
