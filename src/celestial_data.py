# Celestial body data. Distances, sizes and periods used for display are
# artistically scaled; the raw values only feed the info panel.

CELESTIAL_DATA = {
    "sun": {
        "name": "Sun",
        "radius": 696340,  # km
        "display_radius": 5,
        "rotation_period": 25.4,  # days
        "color": 0xFDB813,
        "description": "The Sun is the star at the center of the Solar System. It is a nearly perfect sphere "
                       "of hot plasma, heated to incandescence by nuclear fusion reactions in its core.",
        "stats": {
            "Mass": "1.989 × 10³⁰ kg",
            "Temperature": "5,778 K (surface)",
            "Age": "4.6 billion years",
            "Composition": "73% Hydrogen, 25% Helium",
        },
    },
    "planets": {
        "mercury": {
            "name": "Mercury",
            "radius": 2439.7,
            "display_radius": 0.8,
            "distance": 57.9,  # million km from the sun
            "display_distance": 20,
            "orbital_period": 88,
            "rotation_period": 58.6,
            "color": 0x8C7853,
            "description": "Mercury is the smallest planet in the Solar System and the closest to the Sun. "
                           "It has a very thin atmosphere and experiences extreme temperature variations.",
            "stats": {
                "Distance from Sun": "57.9 million km",
                "Orbital Period": "88 Earth days",
                "Day Length": "58.6 Earth days",
                "Mass": "3.301 × 10²³ kg",
                "Moons": "0",
            },
        },
        "venus": {
            "name": "Venus",
            "radius": 6051.8,
            "display_radius": 1.2,
            "distance": 108.2,
            "display_distance": 30,
            "orbital_period": 225,
            "rotation_period": -243,  # retrograde
            "color": 0xFFC649,
            "description": "Venus is the second planet from the Sun and the hottest planet in the Solar System "
                           "due to its thick, toxic atmosphere that traps heat.",
            "stats": {
                "Distance from Sun": "108.2 million km",
                "Orbital Period": "225 Earth days",
                "Day Length": "243 Earth days (retrograde)",
                "Mass": "4.867 × 10²⁴ kg",
                "Surface Temperature": "462°C",
            },
        },
        "earth": {
            "name": "Earth",
            "radius": 6371,
            "display_radius": 1.3,
            "distance": 149.6,
            "display_distance": 42,
            "orbital_period": 365.25,
            "rotation_period": 1,
            "color": 0x6B93D6,
            "description": "Earth is the third planet from the Sun and the only known planet to harbor life. "
                           "It has a dynamic atmosphere, liquid water, and a protective magnetic field.",
            "stats": {
                "Distance from Sun": "149.6 million km",
                "Orbital Period": "365.25 days",
                "Day Length": "24 hours",
                "Mass": "5.972 × 10²⁴ kg",
                "Moons": "1 (Luna)",
            },
            "moons": {
                "luna": {
                    "name": "Luna (Moon)",
                    "radius": 1737.4,
                    "display_radius": 0.27,
                    "distance": 384.4,  # thousand km from earth
                    "display_distance": 3,
                    "orbital_period": 27.3,
                    "color": 0xC0C0C0,
                    "description": "The Moon is Earth's only natural satellite and the fifth largest moon "
                                   "in the Solar System.",
                    "stats": {
                        "Distance from Earth": "384,400 km",
                        "Orbital Period": "27.3 days",
                        "Mass": "7.342 × 10²² kg",
                        "Diameter": "3,474 km",
                    },
                },
            },
        },
        "mars": {
            "name": "Mars",
            "radius": 3389.5,
            "display_radius": 0.9,
            "distance": 227.9,
            "display_distance": 55,
            "orbital_period": 687,
            "rotation_period": 1.03,
            "color": 0xCD5C5C,
            "description": "Mars is the fourth planet from the Sun, known as the Red Planet due to iron oxide "
                           "on its surface. It has the largest volcano and canyon in the Solar System.",
            "stats": {
                "Distance from Sun": "227.9 million km",
                "Orbital Period": "687 Earth days",
                "Day Length": "24.6 hours",
                "Mass": "6.39 × 10²³ kg",
                "Moons": "2 (Phobos, Deimos)",
            },
        },
        "jupiter": {
            "name": "Jupiter",
            "radius": 69911,
            "display_radius": 3.5,
            "distance": 778.5,
            "display_distance": 80,
            "orbital_period": 4333,
            "rotation_period": 0.41,
            "color": 0xD8CA9D,
            "description": "Jupiter is the largest planet in the Solar System, a gas giant with a Great Red "
                           "Spot storm and over 80 moons including the four Galilean moons.",
            "stats": {
                "Distance from Sun": "778.5 million km",
                "Orbital Period": "11.9 Earth years",
                "Day Length": "9.9 hours",
                "Mass": "1.898 × 10²⁷ kg",
                "Moons": "80+",
            },
        },
        "saturn": {
            "name": "Saturn",
            "radius": 58232,
            "display_radius": 3.0,
            "distance": 1432,
            "display_distance": 110,
            "orbital_period": 10759,
            "rotation_period": 0.45,
            "color": 0xFAD5A5,
            "description": "Saturn is the sixth planet from the Sun, famous for its prominent ring system. "
                           "It's a gas giant with a lower density than water.",
            "stats": {
                "Distance from Sun": "1.43 billion km",
                "Orbital Period": "29.5 Earth years",
                "Day Length": "10.7 hours",
                "Mass": "5.683 × 10²⁶ kg",
                "Rings": "Prominent ring system",
            },
        },
        "uranus": {
            "name": "Uranus",
            "radius": 25362,
            "display_radius": 2.2,
            "distance": 2867,
            "display_distance": 140,
            "orbital_period": 30687,
            "rotation_period": -0.72,  # retrograde
            "color": 0x4FD0E7,
            "description": "Uranus is the seventh planet from the Sun, an ice giant that rotates on its side. "
                           "It has a faint ring system and 27 known moons.",
            "stats": {
                "Distance from Sun": "2.87 billion km",
                "Orbital Period": "84 Earth years",
                "Day Length": "17.2 hours (retrograde)",
                "Mass": "8.681 × 10²⁵ kg",
                "Axial Tilt": "98 degrees",
            },
        },
        "neptune": {
            "name": "Neptune",
            "radius": 24622,
            "display_radius": 2.1,
            "distance": 4515,
            "display_distance": 170,
            "orbital_period": 60190,
            "rotation_period": 0.67,
            "color": 0x4B70DD,
            "description": "Neptune is the eighth and outermost planet in the Solar System, an ice giant with "
                           "the strongest winds in the Solar System reaching speeds of 2,100 km/h.",
            "stats": {
                "Distance from Sun": "4.52 billion km",
                "Orbital Period": "165 Earth years",
                "Day Length": "16.1 hours",
                "Mass": "1.024 × 10²⁶ kg",
                "Wind Speed": "Up to 2,100 km/h",
            },
        },
    },
}

ASTEROID_BELT = {
    "inner_radius": 60,  # between Mars and Jupiter
    "outer_radius": 75,
    "particle_count": 2000,
    "color": 0x8B7355,
}

SCALE_FACTORS = {
    "distance": 0.1,
    "size": 1,
    "speed": 100,  # orbital motion sped up for visibility
}

# Inner planets orbit 70% slower so they stay readable
INNER_PLANETS = ("mercury", "venus", "earth", "mars")
INNER_PLANET_SPEED = 0.3

RINGED_PLANETS = ("saturn",)
ATMOSPHERE_PLANETS = ("earth",)

SPACE_COLOR = 0x000011
ORBIT_COLOR = 0x88AAFF
RING_COLOR = 0xAAAAAA
CORONA_COLOR = 0xFFA500
GLOW_COLOR = 0xFFAA00
ATMOSPHERE_COLOR = 0x87CEEB


def hex_to_rgb(value):
    """0xRRGGBB -> (r, g, b) floats in [0, 1]"""
    return (
        ((value >> 16) & 0xFF) / 255.0,
        ((value >> 8) & 0xFF) / 255.0,
        (value & 0xFF) / 255.0,
    )

