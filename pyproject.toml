[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raspboot"
version = "0.1.0"
description = "XMODEM file transfer over serial lines, with a simulated Raspberry Pi UART, GPIO, timer, bootloader and kernel shell"
requires-python = ">=3.10"
keywords = ["xmodem", "serial", "tty", "bootloader", "raspberry-pi", "uart", "gpio"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Serial",
    "Topic :: Software Development :: Embedded Systems",
]
dependencies = [
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ttywrite = "raspboot.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["raspboot"]

[tool.pytest.ini_options]
addopts = "-ra"
