"""
직렬화 스키마

외부에서 전달된 딕셔너리 레코드를 marshmallow 스키마로 검증하여 모델 객체로 변환합니다.
"""

from typing import Any, Dict, List, Mapping

from marshmallow import Schema, fields, post_load, validate, EXCLUDE
from marshmallow import ValidationError as SchemaError

from .draw import Draw
from .errors import ValidationError
from .game import GameConfig, WEEKDAYS


class DrawSchema(Schema):
    """추첨 결과 스키마"""

    class Meta:
        unknown = EXCLUDE

    date = fields.Date(allow_none=True, load_default=None)
    numbers = fields.List(fields.Integer(strict=True), required=True, validate=validate.Length(min=1))
    bonus = fields.Integer(allow_none=True, load_default=None)
    jackpot = fields.Float(allow_none=True, load_default=None)

    @post_load
    def make_draw(self, data: Dict[str, Any], **kwargs) -> Draw:
        return Draw(**data)


class GameConfigSchema(Schema):
    """게임 설정 스키마"""

    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True)
    balls = fields.Integer(required=True, validate=validate.Range(min=2))
    pick = fields.Integer(required=True, validate=validate.Range(min=1))
    bonus_balls = fields.Integer(allow_none=True, load_default=None, validate=validate.Range(min=1))
    draw_days = fields.List(fields.String(validate=validate.OneOf(WEEKDAYS)), load_default=list)
    jackpot_start = fields.Integer(load_default=0)
    is_annuity = fields.Boolean(load_default=False)
    prize_structure = fields.Dict(keys=fields.String(), values=fields.String(), load_default=dict)

    @post_load
    def make_game(self, data: Dict[str, Any], **kwargs) -> GameConfig:
        data['draw_days'] = tuple(data['draw_days'])
        return GameConfig(**data)


def load_draws(records: List[Mapping[str, Any]]) -> List[Draw]:
    """
    레코드 목록을 Draw 목록으로 변환

    Args:
        records: {'date', 'numbers', 'bonus', 'jackpot'} 형태의 딕셔너리 목록

    Returns:
        Draw 목록 (게임 기준 범위 검사는 DrawDataset 생성 시 수행)
    """
    try:
        return DrawSchema(many=True).load(records)
    except SchemaError as e:
        raise ValidationError(f"추첨 레코드 형식이 잘못되었습니다: {e.messages}", invariant='schema') from e


def load_game(record: Mapping[str, Any]) -> GameConfig:
    """딕셔너리에서 게임 설정 생성"""
    try:
        return GameConfigSchema().load(record)
    except SchemaError as e:
        raise ValidationError(f"게임 설정 형식이 잘못되었습니다: {e.messages}", invariant='schema') from e
