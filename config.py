import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# GetImg API Configuration
GETIMG_API_KEY = os.getenv("GETIMG_API_KEY")
GETIMG_API_URL = os.getenv("GETIMG_API_URL", "https://api.getimg.ai/v1")
DEFAULT_MODEL = os.getenv("GETIMG_MODEL", "lcm-realistic-vision-v5-1")

# Models pinned by the stable-diffusion endpoints
EDIT_MODEL = "instruct-pix2pix"
INPAINT_MODEL = "stable-diffusion-v1-5-inpainting"
CONTROLNET_MODEL = "stable-diffusion-v1-5"

# API Timeout Configuration
GETIMG_TIMEOUT = float(os.getenv("GETIMG_TIMEOUT", "60"))  # seconds

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "false").lower() == "true"
LOG_FILE_PATH = os.getenv("LOG_FILE_PATH", "logs/getimg.log")
