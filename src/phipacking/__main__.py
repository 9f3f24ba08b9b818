"""Run with: python -m phipacking"""
from phipacking.main import main

if __name__ == "__main__":
    main()
