import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Yelp Fusion credentials; never hard-code the key
    YELP_API_KEY = os.environ.get('YELP_API_KEY', '')
    YELP_API_URL = os.environ.get('YELP_API_URL', 'https://api.yelp.com/v3')
    YELP_SEARCH_LIMIT = int(os.environ.get('YELP_SEARCH_LIMIT', '10'))
    YELP_TIMEOUT_SEC = float(os.environ.get('YELP_TIMEOUT_SEC', '10'))
    # Optional httpx transport override (tests plug in httpx.MockTransport)
    YELP_HTTP_TRANSPORT = None
    JOIN_CODE_LENGTH = int(os.environ.get('JOIN_CODE_LENGTH', '6'))
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get('CORS_ORIGINS', 'http://localhost:8080').split(',') if o.strip()
    ]
