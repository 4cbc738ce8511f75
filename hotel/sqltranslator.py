#!/usr/bin/env python3
"""
SQL statements used by the application, one translator class per provider.

Statements are written once with a ``{p}`` marker for each bound value, the
marker is replaced by the placeholder of the provider driver. No value coming
from the user is ever formatted into the SQL text.
"""


class MetaSQLTranslator(type):
    """
    Store translator in PROVIDERS attribute. The key of PROVIDERS is
    lower-case class name without Translator suffix

    i.e: SqliteTranslator --> sqlite
    """

    PROVIDERS = {}

    def __init__(cls, name, bases, attrs):
        if name != 'SQLTranslator':
            if not name.endswith('Translator'):
                raise ValueError("{} class name must end with by 'Translator'".format(cls))
            provider_name = name[:-len('Translator')].lower()
            type(cls).PROVIDERS[provider_name] = cls
            cls.PROVIDER = provider_name


class SQLTranslator(metaclass=MetaSQLTranslator):

    PLACEHOLDER = '%s'
    SERIAL = 'SERIAL PRIMARY KEY'
    MONEY = 'NUMERIC(10, 2)'
    COORDINATE = 'DOUBLE PRECISION'

    TABLES = (
        "CREATE TABLE IF NOT EXISTS Users("
        "userID {serial}, "
        "name VARCHAR(50) NOT NULL, "
        "password VARCHAR(255) NOT NULL, "
        "userType VARCHAR(10) NOT NULL)",

        "CREATE TABLE IF NOT EXISTS Hotels("
        "hotelID {serial}, "
        "hotelName VARCHAR(50) NOT NULL, "
        "latitude {coordinate} NOT NULL, "
        "longitude {coordinate} NOT NULL, "
        "managerUserID INTEGER NOT NULL, "
        "FOREIGN KEY (managerUserID) REFERENCES Users(userID))",

        "CREATE TABLE IF NOT EXISTS Rooms("
        "hotelID INTEGER NOT NULL, "
        "roomNumber INTEGER NOT NULL, "
        "price {money} NOT NULL, "
        "imageURL VARCHAR(400), "
        "PRIMARY KEY (hotelID, roomNumber), "
        "FOREIGN KEY (hotelID) REFERENCES Hotels(hotelID))",

        "CREATE TABLE IF NOT EXISTS MaintenanceCompany("
        "companyID {serial}, "
        "name VARCHAR(50) NOT NULL, "
        "address VARCHAR(100), "
        "isCertified BOOLEAN NOT NULL)",

        "CREATE TABLE IF NOT EXISTS RoomBookings("
        "bookingID {serial}, "
        "customerID INTEGER NOT NULL, "
        "hotelID INTEGER NOT NULL, "
        "roomNumber INTEGER NOT NULL, "
        "bookingDate DATE NOT NULL, "
        "UNIQUE (hotelID, roomNumber, bookingDate), "
        "FOREIGN KEY (customerID) REFERENCES Users(userID), "
        "FOREIGN KEY (hotelID, roomNumber) REFERENCES Rooms(hotelID, roomNumber))",

        "CREATE TABLE IF NOT EXISTS RoomUpdatesLog("
        "updateNumber {serial}, "
        "managerID INTEGER NOT NULL, "
        "hotelID INTEGER NOT NULL, "
        "roomNumber INTEGER NOT NULL, "
        "oldPrice {money}, "
        "newPrice {money}, "
        "oldImageURL VARCHAR(400), "
        "newImageURL VARCHAR(400), "
        "updatedOn TIMESTAMP NOT NULL, "
        "FOREIGN KEY (managerID) REFERENCES Users(userID), "
        "FOREIGN KEY (hotelID, roomNumber) REFERENCES Rooms(hotelID, roomNumber))",

        "CREATE TABLE IF NOT EXISTS RoomRepairs("
        "repairID {serial}, "
        "companyID INTEGER NOT NULL, "
        "hotelID INTEGER NOT NULL, "
        "roomNumber INTEGER NOT NULL, "
        "repairDate DATE NOT NULL, "
        "FOREIGN KEY (companyID) REFERENCES MaintenanceCompany(companyID), "
        "FOREIGN KEY (hotelID, roomNumber) REFERENCES Rooms(hotelID, roomNumber))",

        "CREATE TABLE IF NOT EXISTS RoomRepairRequests("
        "requestNumber {serial}, "
        "managerID INTEGER NOT NULL, "
        "repairID INTEGER NOT NULL, "
        "status VARCHAR(20) NOT NULL, "
        "FOREIGN KEY (managerID) REFERENCES Users(userID), "
        "FOREIGN KEY (repairID) REFERENCES RoomRepairs(repairID))",
    )

    @classmethod
    def bind(cls, sql):
        return sql.format(p=cls.PLACEHOLDER)

    @classmethod
    def create_schema(cls):
        return [table.format(serial=cls.SERIAL, money=cls.MONEY, coordinate=cls.COORDINATE)
                for table in cls.TABLES]

    @staticmethod
    def generated_id_probe(table_name, column_name):
        raise NotImplementedError

    # Users

    @classmethod
    def insert_user(cls):
        return cls.bind("INSERT INTO Users (name, password, userType) VALUES ({p}, {p}, {p})")

    @classmethod
    def user_password(cls):
        return cls.bind("SELECT password FROM Users WHERE userID = {p}")

    # Hotels and rooms

    @classmethod
    def hotels_within(cls):
        """
        Hotels whose euclidean distance to (latitude, longitude) is lower or
        equal to a radius. Parameters: lat, lat, long, long, radius².
        """
        return cls.bind(
            "SELECT * FROM Hotels "
            "WHERE (latitude - {p}) * (latitude - {p}) "
            "+ (longitude - {p}) * (longitude - {p}) <= {p} "
            "ORDER BY hotelID")

    @classmethod
    def manages_hotel(cls):
        return cls.bind("SELECT 1 FROM Hotels WHERE hotelID = {p} AND managerUserID = {p}")

    @classmethod
    def room_availability(cls):
        return cls.bind(
            "SELECT R.roomNumber, R.price, "
            "(CASE WHEN B.bookingID IS NULL THEN 'Available' ELSE 'Not Available' END) AS availability "
            "FROM Rooms R LEFT JOIN RoomBookings B "
            "ON R.hotelID = B.hotelID AND R.roomNumber = B.roomNumber AND B.bookingDate = {p} "
            "WHERE R.hotelID = {p} "
            "ORDER BY R.roomNumber")

    @classmethod
    def room_price(cls):
        return cls.bind("SELECT price FROM Rooms WHERE hotelID = {p} AND roomNumber = {p}")

    @classmethod
    def room_info(cls):
        return cls.bind("SELECT price, imageURL FROM Rooms WHERE hotelID = {p} AND roomNumber = {p}")

    @classmethod
    def update_room(cls):
        return cls.bind("UPDATE Rooms SET price = {p}, imageURL = {p} "
                        "WHERE hotelID = {p} AND roomNumber = {p}")

    # Bookings

    @classmethod
    def booking_exists(cls):
        return cls.bind("SELECT 1 FROM RoomBookings "
                        "WHERE hotelID = {p} AND roomNumber = {p} AND bookingDate = {p}")

    @classmethod
    def insert_booking(cls):
        return cls.bind("INSERT INTO RoomBookings (customerID, hotelID, roomNumber, bookingDate) "
                        "VALUES ({p}, {p}, {p}, {p})")

    @classmethod
    def recent_bookings(cls):
        return cls.bind(
            "SELECT B.bookingID, B.hotelID, B.roomNumber, B.bookingDate, R.price "
            "FROM RoomBookings B JOIN Rooms R "
            "ON R.hotelID = B.hotelID AND R.roomNumber = B.roomNumber "
            "WHERE B.customerID = {p} "
            "ORDER BY B.bookingDate DESC, B.bookingID DESC "
            "LIMIT {p}")

    @classmethod
    def hotel_bookings(cls):
        return cls.bind(
            "SELECT B.bookingID, U.name AS customerName, B.roomNumber, B.bookingDate "
            "FROM RoomBookings B JOIN Users U ON U.userID = B.customerID "
            "WHERE B.hotelID = {p} AND B.bookingDate >= {p} AND B.bookingDate <= {p} "
            "ORDER BY B.bookingDate DESC, B.bookingID DESC")

    @classmethod
    def regular_customers(cls):
        return cls.bind(
            "SELECT U.userID, U.name, COUNT(*) AS bookings "
            "FROM RoomBookings B JOIN Users U ON U.userID = B.customerID "
            "WHERE B.hotelID = {p} "
            "GROUP BY U.userID, U.name "
            "ORDER BY bookings DESC, U.userID "
            "LIMIT {p}")

    # Room updates

    @classmethod
    def insert_room_update(cls):
        return cls.bind(
            "INSERT INTO RoomUpdatesLog (managerID, hotelID, roomNumber, oldPrice, newPrice, "
            "oldImageURL, newImageURL, updatedOn) "
            "VALUES ({p}, {p}, {p}, {p}, {p}, {p}, {p}, CURRENT_TIMESTAMP)")

    @classmethod
    def recent_room_updates(cls):
        return cls.bind(
            "SELECT updateNumber, hotelID, roomNumber, oldPrice, newPrice, "
            "oldImageURL, newImageURL, updatedOn "
            "FROM RoomUpdatesLog WHERE managerID = {p} "
            "ORDER BY updatedOn DESC, updateNumber DESC "
            "LIMIT {p}")

    # Repairs

    @classmethod
    def company_exists(cls):
        return cls.bind("SELECT 1 FROM MaintenanceCompany WHERE companyID = {p}")

    @classmethod
    def insert_repair(cls):
        return cls.bind("INSERT INTO RoomRepairs (companyID, hotelID, roomNumber, repairDate) "
                        "VALUES ({p}, {p}, {p}, CURRENT_DATE)")

    @classmethod
    def insert_repair_request(cls):
        return cls.bind("INSERT INTO RoomRepairRequests (managerID, repairID, status) "
                        "VALUES ({p}, {p}, {p})")

    @classmethod
    def repair_requests(cls):
        return cls.bind(
            "SELECT Q.requestNumber, R.hotelID, R.roomNumber, C.name AS company, "
            "R.repairDate, Q.status "
            "FROM RoomRepairRequests Q "
            "JOIN RoomRepairs R ON R.repairID = Q.repairID "
            "JOIN MaintenanceCompany C ON C.companyID = R.companyID "
            "WHERE Q.managerID = {p} "
            "ORDER BY R.repairDate DESC, Q.requestNumber DESC")


class PostgresqlTranslator(SQLTranslator):

    @staticmethod
    def generated_id_probe(table_name, column_name):
        # Unquoted identifiers are folded to lower case by PostgreSQL.
        return ("SELECT currval(pg_get_serial_sequence('{}', '{}'))"
                .format(table_name.lower(), column_name.lower()))


class MysqlTranslator(SQLTranslator):
    SERIAL = 'INTEGER AUTO_INCREMENT PRIMARY KEY'
    COORDINATE = 'DOUBLE'

    @staticmethod
    def generated_id_probe(table_name, column_name):
        return 'SELECT LAST_INSERT_ID()'


class SqliteTranslator(SQLTranslator):
    PLACEHOLDER = '?'
    SERIAL = 'INTEGER PRIMARY KEY AUTOINCREMENT'
    MONEY = 'REAL'
    COORDINATE = 'REAL'

    @staticmethod
    def generated_id_probe(table_name, column_name):
        return 'SELECT last_insert_rowid()'
