"""Run with: python -m titletexture"""
from titletexture.main import main

if __name__ == "__main__":
    main()
