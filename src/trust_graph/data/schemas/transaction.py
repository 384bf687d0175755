"""Transaction schema - a single payment read from the stream."""

from pydantic import BaseModel, Field

from trust_graph.data.parsing import parse_party_ids


class Transaction(BaseModel):
    """Payment between two parties.
    
    Only the party ids are interpreted; the raw record is kept so callers
    can carry the remaining fields through unchanged.
    """
    payer_id: int = Field(..., description="Identifier of the paying party")
    payee_id: int = Field(..., description="Identifier of the receiving party")
    line_number: int = Field(default=0, ge=0, description="1-based position in the source file")
    raw: str = Field(default="", description="Original record text")
    
    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "payer_id": 49466,
                "payee_id": 6989,
                "line_number": 2,
                "raw": "2016-11-02 09:49:29, 49466, 6989, 23.74, Uber",
            }
        }
    }
    
    @property
    def is_self_payment(self) -> bool:
        """Whether payer and payee are the same party."""
        return self.payer_id == self.payee_id
    
    @classmethod
    def from_line(cls, line: str, line_number: int = 0) -> "Transaction":
        """Build a transaction from a raw delimited record.
        
        Raises:
            RecordParseError: If the party ids cannot be extracted
        """
        payer_id, payee_id = parse_party_ids(line)
        return cls(payer_id=payer_id, payee_id=payee_id, line_number=line_number, raw=line)
