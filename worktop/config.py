from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Worktop Quoting Engine"
    LOG_LEVEL: str = "INFO"

    DEFAULT_CURRENCY: str = "HUF"
    DEFAULT_VAT_PERCENT: float = 27.0

    # Geometry: millimeters
    POSTFORMING_MARGIN_MM: float = 10.0   # lost width when the postformed edge is removed
    MACHINING_ALLOWANCE_MM: float = 50.0  # milling allowance on the joined member

    # Default fee schedule: gross, whole currency units
    CROSS_CUT_FEE_GROSS: float = 3000.0
    LENGTH_CUT_FEE_PER_METER_GROSS: float = 1500.0
    RADIUS_CUT_FEE_GROSS: float = 5000.0
    ANGLE_CUT_FEE_GROSS: float = 4000.0
    CUTOUT_FEE_GROSS: float = 8000.0
    EDGE_BANDING_FEE_PER_METER_GROSS: float = 2500.0
    JOIN_FEE_GROSS: float = 26000.0

    class Config:
        env_file = ".env"

    def default_fee_schedule(self):
        from .models import FeeAmount, FeeSchedule

        return FeeSchedule(
            cross_cut=FeeAmount(gross=self.CROSS_CUT_FEE_GROSS),
            length_cut_per_meter=FeeAmount(gross=self.LENGTH_CUT_FEE_PER_METER_GROSS),
            radius_cut=FeeAmount(gross=self.RADIUS_CUT_FEE_GROSS),
            angle_cut=FeeAmount(gross=self.ANGLE_CUT_FEE_GROSS),
            cutout=FeeAmount(gross=self.CUTOUT_FEE_GROSS),
            edge_banding_per_meter=FeeAmount(gross=self.EDGE_BANDING_FEE_PER_METER_GROSS),
            join=FeeAmount(gross=self.JOIN_FEE_GROSS),
            vat_percent=self.DEFAULT_VAT_PERCENT,
            currency=self.DEFAULT_CURRENCY,
        )


settings = Settings()
