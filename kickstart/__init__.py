"""kickstart -- interactive scaffolder for React applications (Vite or Next.js)."""

__version__ = "0.1.0"
