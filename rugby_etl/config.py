import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Base Paths
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = Path(os.environ.get("RUGBY_DATA_DIR", BASE_DIR / "data"))
LOG_DIR = BASE_DIR / "logs"

# API-Sports rugby endpoint
RUGBY_API_CONFIG = {
    'base_url': os.environ.get('RUGBY_API_BASE_URL', 'https://v1.rugby.api-sports.io'),
    'api_key': os.environ.get('API_RUGBY_KEY', ''),

    # Request timeout (seconds)
    'timeout': 30,
}

# Text generation (OpenAI-compatible chat completions, Hugging Face router by default)
LLM_CONFIG = {
    'base_url': os.environ.get('LLM_BASE_URL', 'https://router.huggingface.co/v1'),
    'api_key': os.environ.get('HF_ACCESS_TOKEN', ''),
    'model': os.environ.get('LLM_MODEL', 'meta-llama/Llama-3.1-8B-Instruct'),

    # Generation parameters
    'max_tokens': 900,  # ~500-word articles
    'temperature': 0.7,

    # Generation can be slow on shared inference
    'timeout': 120,
}

# Flat-file article storage
ARTICLES_CONFIG = {
    'path': Path(os.environ.get('ARTICLES_PATH', DATA_DIR / 'articles.json')),
    'default_type': 'generic',
}

# Standings
STANDINGS_CONFIG = {
    'default_season': 2022,

    # Saved provider payloads read by the dashboard (keeps free-plan quota for the pipelines)
    'snapshot_dir': Path(os.environ.get('STANDINGS_SNAPSHOT_DIR', DATA_DIR / 'standings')),
    'snapshot_files': {
        'TOP14': 'Top14.json',
        'PREMIERSHIP': 'Premiership.json',
        'URC': 'URC.json',
        'SUPER_RUGBY': 'Super_Rugby.json',
        'SIX_NATIONS': 'Six_Nations.json',
        'RUGBY_CHAMPIONSHIP': 'Rugby_Championship.json',
        'RUGBY_WORLD_CUP': 'Rugby_World_Cup.json',
        'CHAMPIONS_CUP': 'Champions_Cup.json',
        'CN_HONRA_PORTUGAL': 'CN_Honra.json',
    },
}

# Weekly triggers (local time, Monday=0)
SCHEDULE_CONFIG = {
    'roundup': {
        'day_of_week': 0,  # Monday 20:00
        'hour': 20,
        'minute': 0,
    },
    'vlog': {
        'day_of_week': 2,  # Wednesday 20:00
        'hour': 20,
        'minute': 0,
    },

    # Size of the simulated "this week" window
    'days_back': 7,

    # Recent vlogs listed in the prompt to steer away from repeats
    'previous_vlogs_max': 10,
}

VLOG_TOPICS = [
    "How modern rugby kicking strategies create territorial pressure",
    "Why defense systems have changed so much in the last decade",
    "The evolution of number 10: playmaker, kicker and game manager",
    "URC vs Top 14 vs Premiership: different styles of rugby explained",
    "How data and analytics are changing rugby coaching",
    "Key differences between international rugby and club rugby",
    "Pendulum defense systems and how backfield coverage works",
]
