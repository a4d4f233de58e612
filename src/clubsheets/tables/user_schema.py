"""
Schema dos usuários do painel administrativo.

Usuários são identificados pelo username (chave natural) e cadastrados
diretamente na planilha; o store só os lê.
"""
from dataclasses import dataclass

from .binding import EntityKind
from .codec import RowCodec, TextColumn

USERS_TABLE_NAME = "Korisnici"
USERS_TABLE_HEADER = ["Username", "Password", "Ime", "Prezime"]


@dataclass
class User:
    username: str
    password: str = ""
    name: str = ""
    surname: str = ""


USER_CODEC = RowCodec(
    User,
    (
        TextColumn("username"),
        TextColumn("password"),
        TextColumn("name"),
        TextColumn("surname"),
    ),
)

USER_KIND = EntityKind.define("Korisnik", USERS_TABLE_NAME, USER_CODEC, id_field="username")
