"""secboot CLI - Entry point for secboot package when run as module"""

# Load environment first
from dotenv import load_dotenv

load_dotenv()

from secboot.cli import main

if __name__ == "__main__":
    main()
