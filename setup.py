from setuptools import setup, find_packages

setup(
    name="logsmith",
    version="0.1.0",
    description="Configurable message logging to the console, severity streams and log files",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_packages("src"),  # Encuentra automáticamente la carpeta 'logsmith'
    python_requires=">=3.8",
    install_requires=[
        "rich",  # Colores de la salida por consola
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'logsmith=logsmith.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
