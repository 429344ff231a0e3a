"""Allow running as: python -m rfp_screening"""

from rfp_screening.main import main

if __name__ == "__main__":
    main()
