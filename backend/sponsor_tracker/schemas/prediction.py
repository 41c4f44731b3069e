from pydantic import BaseModel, ConfigDict, Field


class PredictionOut(BaseModel):
    # Wire names follow the dashboard client.
    interview_probability: float = Field(alias="interviewProbability")
    offer_probability: float = Field(alias="offerProbability")
    sample_size: int = Field(alias="sampleSize")

    model_config = ConfigDict(populate_by_name=True)
