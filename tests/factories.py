"""Request payloads shared by the test modules."""


def book_payload(**overrides) -> dict:
    data = {
        "title": "The Cathedral of Numbers",
        "author": "Layla Haddad",
        "description": "Mathematics through architecture.",
        "price": 24.99,
        "image": "/images/book1.jpg",
        "isbn": "978-0-00-000001-1",
        "genre": ["History", "Science"],
        "tags": ["mathematics"],
        "datePublished": "2021-03-14",
        "pages": 342,
        "language": "English",
        "publisher": "Amana Press",
        "rating": 4.6,
        "reviewCount": 0,
        "inStock": True,
        "featured": False,
    }
    data.update(overrides)
    return data


def review_payload(book_id: str, **overrides) -> dict:
    data = {
        "bookId": book_id,
        "author": "K. Mensah",
        "rating": 4,
        "title": "Great for students",
        "comment": "Accessible without being shallow.",
    }
    data.update(overrides)
    return data
