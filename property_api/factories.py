"""Realistic Mexican property listings for seeding and tests."""
import random
from typing import Optional

from faker import Faker

from property_api.config import settings
from property_api.schemas import PropertyStatus, PropertyType

CITIES_BY_STATE = {
    "Aguascalientes": ["Aguascalientes", "Calvillo", "Rincón de Romos"],
    "Baja California": ["Tijuana", "Mexicali", "Ensenada", "Tecate", "Rosarito"],
    "Baja California Sur": ["La Paz", "Los Cabos", "Loreto", "Comondú"],
    "Campeche": ["Campeche", "Ciudad del Carmen", "Champotón"],
    "Chiapas": ["Tuxtla Gutiérrez", "San Cristóbal de las Casas", "Tapachula", "Comitán"],
    "Chihuahua": ["Chihuahua", "Ciudad Juárez", "Delicias", "Cuauhtémoc"],
    "Ciudad de México": [
        "Álvaro Obregón", "Azcapotzalco", "Benito Juárez", "Coyoacán",
        "Cuauhtémoc", "Miguel Hidalgo", "Tlalpan", "Xochimilco",
    ],
    "Coahuila": ["Saltillo", "Torreón", "Monclova", "Piedras Negras"],
    "Colima": ["Colima", "Manzanillo", "Tecomán", "Villa de Álvarez"],
    "Durango": ["Durango", "Gómez Palacio", "Lerdo", "Santiago Papasquiaro"],
    "Estado de México": ["Toluca", "Naucalpan", "Tlalnepantla", "Nezahualcóyotl", "Ecatepec", "Cuautitlán"],
    "Guanajuato": ["León", "Guanajuato", "Irapuato", "Celaya", "Salamanca", "Pénjamo"],
    "Guerrero": ["Acapulco", "Chilpancingo", "Iguala", "Taxco", "Zihuatanejo"],
    "Hidalgo": ["Pachuca", "Tulancingo", "Tizayuca", "Huejutla"],
    "Jalisco": ["Guadalajara", "Zapopan", "Tlaquepaque", "Tonalá", "Puerto Vallarta", "Tlajomulco"],
    "Michoacán": ["Morelia", "Uruapan", "Zamora", "Lázaro Cárdenas", "Apatzingán"],
    "Morelos": ["Cuernavaca", "Jiutepec", "Temixco", "Cuautla"],
    "Nayarit": ["Tepic", "Bahía de Banderas", "Xalisco", "Santiago Ixcuintla"],
    "Nuevo León": ["Monterrey", "Guadalupe", "San Nicolás de los Garza", "Apodaca", "Santa Catarina"],
    "Oaxaca": ["Oaxaca de Juárez", "Salina Cruz", "Tuxtepec", "Juchitán"],
    "Puebla": ["Puebla", "Tehuacán", "San Martín Texmelucan", "Atlixco"],
    "Querétaro": ["Santiago de Querétaro", "San Juan del Río", "Corregidora", "El Marqués"],
    "Quintana Roo": ["Cancún", "Chetumal", "Playa del Carmen", "Cozumel", "Tulum"],
    "San Luis Potosí": ["San Luis Potosí", "Soledad de Graciano Sánchez", "Ciudad Valles", "Matehuala"],
    "Sinaloa": ["Culiacán", "Mazatlán", "Los Mochis", "Guasave"],
    "Sonora": ["Hermosillo", "Ciudad Obregón", "Nogales", "Navojoa"],
    "Tabasco": ["Villahermosa", "Cárdenas", "Comalcalco", "Huimanguillo"],
    "Tamaulipas": ["Reynosa", "Matamoros", "Nuevo Laredo", "Tampico", "Ciudad Victoria"],
    "Tlaxcala": ["Tlaxcala", "Apizaco", "Huamantla", "Zacatelco"],
    "Veracruz": ["Veracruz", "Xalapa", "Coatzacoalcos", "Córdoba", "Orizaba", "Poza Rica"],
    "Yucatán": ["Mérida", "Valladolid", "Progreso", "Tizimín"],
    "Zacatecas": ["Zacatecas", "Fresnillo", "Guadalupe", "Jerez"],
}

# Inclusive range of the two leading postal code digits per state
POSTAL_PREFIXES_BY_STATE = {
    "Aguascalientes": (20, 20),
    "Baja California": (21, 21),
    "Baja California Sur": (23, 23),
    "Campeche": (24, 24),
    "Chiapas": (29, 29),
    "Chihuahua": (31, 31),
    "Ciudad de México": (1, 16),
    "Coahuila": (25, 25),
    "Colima": (28, 28),
    "Durango": (34, 34),
    "Estado de México": (50, 57),
    "Guanajuato": (36, 36),
    "Guerrero": (39, 39),
    "Hidalgo": (42, 42),
    "Jalisco": (44, 49),
    "Michoacán": (58, 61),
    "Morelos": (62, 62),
    "Nayarit": (63, 63),
    "Nuevo León": (64, 67),
    "Oaxaca": (68, 71),
    "Puebla": (72, 75),
    "Querétaro": (76, 76),
    "Quintana Roo": (77, 77),
    "San Luis Potosí": (78, 78),
    "Sinaloa": (80, 82),
    "Sonora": (83, 83),
    "Tabasco": (86, 86),
    "Tamaulipas": (87, 89),
    "Tlaxcala": (90, 90),
    "Veracruz": (91, 96),
    "Yucatán": (97, 97),
    "Zacatecas": (98, 98),
}

STREET_TYPES = ["Calle", "Avenida", "Boulevard", "Privada", "Cerrada", "Callejón"]
STREET_NAMES = [
    "Benito Juárez", "Miguel Hidalgo", "Francisco I. Madero", "Emiliano Zapata",
    "Morelos", "Insurgentes", "Reforma", "Revolución", "16 de Septiembre",
    "Independencia", "Constitución", "Libertad", "Progreso", "Juárez",
    "Las Flores", "Los Pinos", "del Sol", "de la Paz", "Principal",
    "Centro", "Norte", "Sur", "Oriente", "Poniente",
]

FEATURES = [
    "hardwood_floors", "granite_countertops", "stainless_steel_appliances",
    "walk_in_closet", "fireplace", "balcony", "patio", "air_conditioning",
    "dishwasher", "laundry_in_unit", "pet_friendly", "parking",
]

LUXURY_FEATURES = [
    "hardwood_floors", "granite_countertops", "stainless_steel_appliances",
    "walk_in_closet", "fireplace", "master_suite", "gourmet_kitchen",
    "wine_cellar", "home_theater", "smart_home",
]

# Mainland and peninsulas, Chiapas to Baja California
MEXICO_LATITUDE = (14.5, 32.7)
MEXICO_LONGITUDE = (-118.4, -86.7)


class PropertyFactory:
    """Generates property payloads shaped like ``PropertyCreate`` input.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``es_MX``).
    """

    def __init__(self, seed: Optional[int] = None, locale: str = "es_MX"):
        self.fake = Faker(locale)
        self.random = random.Random(seed)
        if seed is not None:
            self.fake.seed_instance(seed)

    # ---------- address parts ----------

    def state(self) -> str:
        return self.random.choice(list(CITIES_BY_STATE))

    def city(self, state: str) -> str:
        return self.random.choice(CITIES_BY_STATE.get(state, ["Ciudad Ejemplo"]))

    def zip_code(self, state: str) -> str:
        """
        Postal code whose leading digits belong to the state.

        Examples:
            "Jalisco"  → "MX-45123"
        """
        low, high = POSTAL_PREFIXES_BY_STATE.get(state, (99, 99))
        leading = self.random.randint(low, high)
        return f"{settings.POSTAL_CODE_PREFIX}{leading:02d}{self.random.randint(0, 999):03d}"

    def street_address(self) -> str:
        street_type = self.random.choice(STREET_TYPES)
        street_name = self.random.choice(STREET_NAMES)
        return f"{street_type} {street_name} #{self.random.randint(1, 9999)}"

    # ---------- payloads ----------

    def build(self, **overrides) -> dict:
        """One listing with every attribute filled in."""
        square_feet = self.random.randint(500, 5000)
        price = self.random.randint(100000, 2000000)
        state = overrides.pop("state", None) or self.state()

        data = {
            "title": self.fake.sentence(nb_words=3),
            "description": self.fake.paragraph(nb_sentences=3),
            "address": self.street_address(),
            "city": self.city(state),
            "state": state,
            "zip_code": self.zip_code(state),
            "latitude": round(self.random.uniform(*MEXICO_LATITUDE), 8),
            "longitude": round(self.random.uniform(*MEXICO_LONGITUDE), 8),
            "square_feet": square_feet,
            "bedrooms": self.random.randint(1, 6),
            "bathrooms": self.random.randint(1, 4),
            "floors": self.random.randint(1, 3),
            "price": price,
            "monthly_rent": self.random.randint(1500, 100000) if self.random.random() < 0.6 else None,
            "property_taxes": self.random.randint(2000, 15000),
            "property_type": self.random.choice(list(PropertyType)).value,
            "status": self.random.choice(list(PropertyStatus)).value,
            "year_built": self.random.randint(1950, 2024),
            "lot_size": round(self.random.uniform(0.1, 2.0), 2),
            "garage_spaces": self.random.randint(0, 3),
            "has_basement": self.random.random() < 0.3,
            "has_pool": self.random.random() < 0.2,
            "has_garden": self.random.random() < 0.4,
            "features": self.random.sample(FEATURES, self.random.randint(2, 6)),
            "metadata": {
                "mls_number": self.random.randint(10_000_000, 99_999_999),
                "listing_agent": self.fake.name(),
                "last_renovated": int(self.fake.year()) if self.random.random() < 0.4 else None,
            },
            "user_id": None,
        }
        data.update(overrides)
        return data

    def luxury(self, **overrides) -> dict:
        data = self.build()
        data.update({
            "square_feet": self.random.randint(3000, 8000),
            "bedrooms": self.random.randint(4, 8),
            "bathrooms": self.random.randint(3, 6),
            "floors": self.random.randint(2, 4),
            "price": self.random.randint(800000, 5000000),
            "lot_size": round(self.random.uniform(0.5, 3.0), 2),
            "garage_spaces": self.random.randint(2, 4),
            "has_basement": self.random.random() < 0.6,
            "has_pool": self.random.random() < 0.7,
            "has_garden": self.random.random() < 0.8,
            "features": list(LUXURY_FEATURES),
        })
        data.update(overrides)
        return data

    def for_sale(self, **overrides) -> dict:
        data = self.build(status=PropertyStatus.DISPONIBLE.value, monthly_rent=None)
        data.update(overrides)
        return data

    def for_rent(self, **overrides) -> dict:
        data = self.build(
            status=PropertyStatus.DISPONIBLE.value,
            price=None,
            monthly_rent=self.random.randint(800, 5000),
        )
        data.update(overrides)
        return data

    def sold(self, **overrides) -> dict:
        data = self.build(status=PropertyStatus.VENDIDA.value)
        data.update(overrides)
        return data

    def in_state(self, state: str, **overrides) -> dict:
        return self.build(state=state, **overrides)

    def batch(self, count: int, variant: str = "build", **overrides) -> list[dict]:
        make = getattr(self, variant)
        return [make(**overrides) for _ in range(count)]
