#!/usr/bin/env python3
from functools import wraps

from .console import ValidationError
from .db import Error, IntegrityError


MIN_DATE = '0001-01-01'
MAX_DATE = '9999-12-31'
REPAIR_PENDING = 'Pending'


class AuthorizationError(Exception):
    """
    Raised when a user acts on a hotel managed by someone else.
    """


def workflow(method):
    """
    Report the errors of a workflow to the user instead of raising them.
    The workflow returns None when it is aborted.
    """
    @wraps(method)
    def wrapper(self, user_id):
        try:
            return method(self, user_id)
        except AuthorizationError as error:
            self.console.write(str(error))
        except ValidationError as error:
            self.console.error(str(error))
        except Error as error:
            self.console.error('Database error: {}'.format(error))
        return None
    return wrapper


class Workflows:
    """
    Business operations available once the user is logged in.

    Each operation asks its inputs on the console, runs its statements through
    the executor and prints its result. The rows or values shown are returned.
    """

    def __init__(self, executor, console, search_radius=30.0, history_limit=5):
        self.executor = executor
        self.console = console
        self.search_radius = search_radius
        self.history_limit = history_limit

    @property
    def sql(self):
        return self.executor.sql

    def check_manager(self, user_id, hotel_id, refusal=None):
        if not self.executor.run_count_only(self.sql.manages_hotel(), (hotel_id, user_id)):
            raise AuthorizationError(
                refusal or 'You do not manage hotel {} and cannot access its information.'
                .format(hotel_id))

    def _show(self, query, parameters, empty_message):
        rows = self.executor.run_and_collect(query, parameters)
        if not rows:
            self.console.write(empty_message)
        return rows

    @workflow
    def view_hotels(self, user_id):
        latitude = self.console.read_float('Enter latitude: ')
        longitude = self.console.read_float('Enter longitude: ')

        row_count = self.executor.run_and_render(
            self.sql.hotels_within(),
            (latitude, latitude, longitude, longitude, self.search_radius ** 2))
        if row_count == 0:
            self.console.write('Sorry, no hotel found within {:g} units from given place.'
                               .format(self.search_radius))
        return row_count

    @workflow
    def view_rooms(self, user_id):
        hotel_id = self.console.read_int('Enter hotel ID: ')
        booking_date = self.console.read_date('Enter date (YYYY-MM-DD): ')

        rows = self.executor.run_and_collect(self.sql.room_availability(), (booking_date, hotel_id))
        if not rows:
            self.console.write('No room found for the given hotel ID and date.')
        else:
            self.console.table(('Room Number', 'Price', 'Availability'), rows)
        return rows

    @workflow
    def book_room(self, user_id):
        hotel_id = self.console.read_int('Enter hotelID: ')
        room_number = self.console.read_int('Enter room number: ')
        booking_date = self.console.read_date('Enter booking date (YYYY-MM-DD): ')
        not_available = 'The room is not available on the selected date.'

        try:
            with self.executor.transaction():
                if self.executor.run_count_only(self.sql.booking_exists(),
                                                (hotel_id, room_number, booking_date)):
                    self.console.write(not_available)
                    return None

                prices = self.executor.run_and_collect(self.sql.room_price(), (hotel_id, room_number))
                if not prices:
                    raise ValidationError('Room {} does not exist in hotel {}.'
                                          .format(room_number, hotel_id))
                price = prices[0][0]

                self.executor.run_for_effect(self.sql.insert_booking(),
                                             (user_id, hotel_id, room_number, booking_date))
        except IntegrityError:
            # Booked by another session since the check.
            self.console.write(not_available)
            return None

        self.console.write('Booking successfully! Room price: ${}'.format(price))
        return price

    @workflow
    def view_recent_bookings(self, user_id):
        rows = self._show(self.sql.recent_bookings(), (user_id, self.history_limit),
                          'You have no booking yet.')
        if rows:
            self.console.table(('Booking ID', 'Hotel ID', 'Room Number', 'Date', 'Price'), rows)
        return rows

    @workflow
    def update_room(self, user_id):
        hotel_id = self.console.read_int('\tEnter hotelID: ')
        room_number = self.console.read_int('\tEnter room number: ')
        self.check_manager(user_id, hotel_id,
                           'You do not manage the specified hotel and '
                           'cannot update the room information.')

        current = self.executor.run_and_collect(self.sql.room_info(), (hotel_id, room_number))
        if not current:
            raise ValidationError('Room {} does not exist in hotel {}.'.format(room_number, hotel_id))
        self.console.write('Current price: {}, current image URL: {}'.format(*current[0]))

        new_price = self.console.read_float('\tEnter new price: ', minimum=0)
        new_image_url = self.console.read_text('\tEnter new image URL: ').strip()

        with self.executor.transaction():
            current = self.executor.run_and_collect(self.sql.room_info(), (hotel_id, room_number))
            if not current:
                raise ValidationError('Room {} does not exist in hotel {}.'.format(room_number, hotel_id))
            old_price, old_image_url = current[0]
            self.executor.run_for_effect(self.sql.update_room(),
                                         (new_price, new_image_url, hotel_id, room_number))
            self.executor.run_for_effect(self.sql.insert_room_update(),
                                         (user_id, hotel_id, room_number, old_price or None,
                                          new_price, old_image_url or None, new_image_url))

        self.console.write('Room information updated successfully!')
        self.console.write()
        self.console.write('Last {} recent updates:'.format(self.history_limit))
        self.executor.run_and_render(self.sql.recent_room_updates(), (user_id, self.history_limit))
        return new_price, new_image_url

    @workflow
    def view_recent_updates(self, user_id):
        rows = self._show(self.sql.recent_room_updates(), (user_id, self.history_limit),
                          'No room update found.')
        if rows:
            self.console.table(('Update', 'Hotel ID', 'Room Number', 'Old Price', 'New Price',
                                'Old Image URL', 'New Image URL', 'Updated On'), rows)
        return rows

    @workflow
    def view_hotel_bookings(self, user_id):
        hotel_id = self.console.read_int('Enter hotel ID: ')
        self.check_manager(user_id, hotel_id)
        start = self.console.read_date('Enter start date (YYYY-MM-DD, blank for none): ',
                                       required=False) or MIN_DATE
        end = self.console.read_date('Enter end date (YYYY-MM-DD, blank for none): ',
                                     required=False) or MAX_DATE
        if start > end:
            raise ValidationError('Start date {} is after end date {}.'.format(start, end))

        rows = self._show(self.sql.hotel_bookings(), (hotel_id, start, end),
                          'No booking found for hotel {}.'.format(hotel_id))
        if rows:
            self.console.table(('Booking ID', 'Customer', 'Room Number', 'Date'), rows)
        return rows

    @workflow
    def view_regular_customers(self, user_id):
        hotel_id = self.console.read_int('Enter hotel ID: ')
        self.check_manager(user_id, hotel_id)

        rows = self._show(self.sql.regular_customers(), (hotel_id, self.history_limit),
                          'No customer has booked hotel {} yet.'.format(hotel_id))
        if rows:
            self.console.table(('User ID', 'Name', 'Bookings'), rows)
        return rows

    @workflow
    def place_repair_request(self, user_id):
        hotel_id = self.console.read_int('Enter hotel ID: ')
        self.check_manager(user_id, hotel_id)
        room_number = self.console.read_int('Enter room number: ')
        if not self.executor.run_count_only(self.sql.room_price(), (hotel_id, room_number)):
            raise ValidationError('Room {} does not exist in hotel {}.'.format(room_number, hotel_id))
        company_id = self.console.read_int('Enter maintenance company ID: ')
        if not self.executor.run_count_only(self.sql.company_exists(), (company_id,)):
            raise ValidationError('Maintenance company {} does not exist.'.format(company_id))

        with self.executor.transaction():
            self.executor.run_for_effect(self.sql.insert_repair(), (company_id, hotel_id, room_number))
            repair_id = self.executor.last_generated_id(
                self.sql.generated_id_probe('RoomRepairs', 'repairID'))
            self.executor.run_for_effect(self.sql.insert_repair_request(),
                                         (user_id, repair_id, REPAIR_PENDING))
            request_number = self.executor.last_generated_id(
                self.sql.generated_id_probe('RoomRepairRequests', 'requestNumber'))

        self.console.write('Repair request {} placed for room {} of hotel {}.'
                           .format(request_number, room_number, hotel_id))
        return request_number

    @workflow
    def view_repair_requests(self, user_id):
        row_count = self.executor.run_and_render(self.sql.repair_requests(), (user_id,))
        if row_count == 0:
            self.console.write('No repair request placed yet.')
        return row_count
